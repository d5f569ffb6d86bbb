"""Business-rule transformation: conversion, flagging and deduplication."""

from txn_etl.transformation.config import (
    DEFAULT_EXCHANGE_RATES,
    DEFAULT_HIGH_RISK_COUNTRIES,
    FlaggingThresholds,
    TransformationConfig,
    rebase_rates,
)
from txn_etl.transformation.converter import CurrencyConverter
from txn_etl.transformation.rules import FlaggingRules, FlagName
from txn_etl.transformation.stage import TransformationResult, TransformationStage

__all__ = [
    # Config
    "DEFAULT_EXCHANGE_RATES",
    "DEFAULT_HIGH_RISK_COUNTRIES",
    "FlaggingThresholds",
    "TransformationConfig",
    "rebase_rates",
    # Components
    "CurrencyConverter",
    "FlaggingRules",
    "FlagName",
    # Stage
    "TransformationResult",
    "TransformationStage",
]
