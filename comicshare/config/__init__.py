from comicshare.config.base import (
    BaseConfig,
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
)

__all__ = ["BaseConfig", "DevelopmentConfig", "ProductionConfig", "TestingConfig"]
