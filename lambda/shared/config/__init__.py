"""Shared configuration"""
from .settings import ENVIRONMENT, IS_DEV, get_secret
from .logger_config import get_logger, logger

__all__ = ['ENVIRONMENT', 'IS_DEV', 'get_secret', 'get_logger', 'logger']
