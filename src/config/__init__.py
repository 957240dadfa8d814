from .config import (
    BaseConfig,
    DevelopmentConfig,
    ProductionConfig,
    TestConfig,
    get_configuration,
)

__all__ = [
    "BaseConfig",
    "DevelopmentConfig",
    "ProductionConfig",
    "TestConfig",
    "get_configuration",
]
