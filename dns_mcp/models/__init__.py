# Data Models Package
from .zone_record import ZoneRecord
from .analysis_result import AnalysisResult, TtlStats, ZoneStats
from .validation_result import ValidationResult
from .generator_options import GeneratorOptions, LOGGING_LEVELS

__all__ = [
    'ZoneRecord',
    'AnalysisResult',
    'TtlStats',
    'ZoneStats',
    'ValidationResult',
    'GeneratorOptions',
    'LOGGING_LEVELS',
]
