"""
Runtime configuration
=====================

Settings read from the environment. Protocol constants live in params and
are never configurable.
"""

import logging
import os

DEFAULT_PAIRING_CURVE = os.getenv('CHUNKING_PAIRING_CURVE', 'BN254')
DEFAULT_LOG_LEVEL = os.getenv('CHUNKING_LOG_LEVEL', 'WARNING')


class Config:
    """Configuration for the chunking proof library."""

    def __init__(self):
        self.pairing_curve = DEFAULT_PAIRING_CURVE
        self.log_level = DEFAULT_LOG_LEVEL

    @property
    def log_level_number(self) -> int:
        level = logging.getLevelName(self.log_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {self.log_level}")
        return level


def configure_logging(cfg: 'Config' = None) -> None:
    """Apply the configured level to the package logger (for scripts and tests)."""
    cfg = cfg or config
    logging.basicConfig(format='%(asctime)s %(name)s %(levelname)s %(message)s')
    logging.getLogger('chunking_proofs').setLevel(cfg.log_level_number)


# Global configuration instance
config = Config()
