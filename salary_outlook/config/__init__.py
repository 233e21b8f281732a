from .loaders import ConfigLoadError, load_report_config
from .models import ForecastSettings, ReportConfig, SkillSettings

__all__ = [
    "ConfigLoadError",
    "load_report_config",
    "ReportConfig",
    "SkillSettings",
    "ForecastSettings",
]
