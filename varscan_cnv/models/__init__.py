"""Configuration models and their YAML representation

The field descriptions (taken from the attribute docstrings) are written as comments into the
YAML dump, so the output of ``--print-config`` documents itself.
"""

from io import StringIO

from pydantic import BaseModel, ConfigDict
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq

#: Indentation of nested mappings in YAML output
YAML_INDENT = 2


class CnvModel(BaseModel):
    """
    Base class for the configuration models.
    Unknown keys are rejected, attribute docstrings become the field descriptions, and default
    values are validated as well.
    """

    model_config = ConfigDict(
        extra="forbid",
        use_attribute_docstrings=True,
        use_enum_values=True,
        validate_default=True,
    )

    def to_commented_map(self, level: int = 0) -> CommentedMap:
        """Return the model as ``CommentedMap`` with the field descriptions as comments"""
        result = CommentedMap()
        for key, field in type(self).model_fields.items():
            value = getattr(self, key)
            if isinstance(value, CnvModel):
                result[key] = value.to_commented_map(level + 1)
            elif isinstance(value, (list, tuple)):
                result[key] = CommentedSeq(value)
            else:
                result[key] = value
            if field.description:
                result.yaml_set_comment_before_after_key(
                    key, before=field.description, indent=YAML_INDENT * level
                )
        return result

    def model_dump_yaml(self) -> str:
        """Dump as YAML, with the field descriptions as comments"""
        with StringIO() as out:
            yaml_instance().dump(self.to_commented_map(), out)
            return out.getvalue()


def yaml_instance() -> YAML:
    """Return round-trip YAML instance using the indentation of the configuration files"""
    yaml = YAML(typ="rt")
    yaml.indent(mapping=YAML_INDENT, sequence=YAML_INDENT * 2, offset=YAML_INDENT)
    return yaml


def load_yaml(stream) -> CommentedMap:
    """Load YAML from string or file-like ``stream``"""
    return yaml_instance().load(stream)
