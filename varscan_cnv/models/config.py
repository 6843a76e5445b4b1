from typing import Annotated

from pydantic import Field, ValidationError, field_validator
from ruamel.yaml.error import YAMLError

from varscan_cnv.exceptions import UsageException
from varscan_cnv.models import CnvModel, load_yaml


class Tools(CnvModel):
    samtools: str = "samtools"
    """Command for invoking samtools"""

    varscan: str = "varscan"
    """Command for invoking VarScan 2, e.g., ``java -jar /path/to/VarScan.jar``"""

    R: str = "R"
    """Command for invoking R, DNAcopy must be installed"""

    arm_split: str = "varscan-cnv-arm_split"
    """Command for annotating segments with chromosome arms"""


class Mpileup(CnvModel):
    min_mapq: Annotated[int, Field(ge=0)] = 1
    """Minimal mapping quality of reads to consider"""

    extra_args: list[str] = []
    """Additional arguments to ``samtools mpileup``"""


class Coverage(CnvModel):
    min_tumor_depth: Annotated[float, Field(ge=0)] = 10
    """Minimal tumor depth of copy number records to keep"""

    min_control_depth: Annotated[float, Field(ge=0)] = 20
    """Minimal control depth of copy number records to keep"""


class Recenter(CnvModel):
    threshold: Annotated[float, Field(ge=0)] = 0.2
    """Recenter if the median log ratio is outside of [-threshold, threshold]"""


class SanityCheck(CnvModel):
    num_lines: Annotated[int, Field(gt=0)] = 100000
    """Number of pileup lines to check"""

    placeholder: str = "N"
    """Reference base written by samtools mpileup for unknown contigs"""


class Segmentation(CnvModel):
    undo_sd: Annotated[float, Field(gt=0)] = 2.5
    """Value of ``undo.SD`` for DNAcopy ``segment()``"""


class PipelineConfig(CnvModel):
    tools: Tools = Tools()

    min_samtools_version: str = "1.3"
    """Minimal samtools version, checked at startup"""

    mpileup: Mpileup = Mpileup()

    coverage: Coverage = Coverage()

    recenter: Recenter = Recenter()

    sanity_check: SanityCheck = SanityCheck()

    segmentation: Segmentation = Segmentation()

    @field_validator("min_samtools_version")
    @classmethod
    def ensure_version_string(cls, value: str) -> str:
        if not all(part.isdigit() for part in value.split(".")):
            raise ValueError(f"Invalid version string '{value}'")
        return value


def load_config(path=None) -> PipelineConfig:
    """Load configuration from YAML file at ``path``, defaults if ``None``"""
    if path is None:
        return PipelineConfig()
    try:
        with open(path, "rt") as inputf:
            data = load_yaml(inputf) or {}
    except (OSError, YAMLError) as e:
        raise UsageException(f"Could not read configuration file {path}: {e}") from e
    try:
        return PipelineConfig.model_validate(data)
    except ValidationError as e:
        raise UsageException(f"Invalid configuration in {path}:\n{e}") from e
