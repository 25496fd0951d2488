"""Pipeline orchestration"""

from .config import PipelineConfig, OUTPUT_FORMATS
from .runner import (
    CFGPipeline,
    FunctionCFG,
    function_stats,
    run_pipeline,
)

__all__ = [
    "PipelineConfig",
    "OUTPUT_FORMATS",
    "CFGPipeline",
    "FunctionCFG",
    "function_stats",
    "run_pipeline",
]
