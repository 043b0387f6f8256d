import pytest

from md_to_text.pipeline import ConversionPipeline, PipelineConfig
from md_to_text.security import SecurityConfig


@pytest.fixture
def pipeline():
    # pytest may place tmp_path under a blocked prefix on some hosts
    security = SecurityConfig(blocked_paths=("/etc", "/proc", "/sys", "/dev"))
    return ConversionPipeline(PipelineConfig(security=security))
