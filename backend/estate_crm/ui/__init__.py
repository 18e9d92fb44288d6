"""
UI data layer: query cache and page data for the server-rendered views.
"""
from .cache import QueryCache
from .data import CrmData, MutationResult, Notice, PIPELINE_COLUMNS

__all__ = ["QueryCache", "CrmData", "MutationResult", "Notice", "PIPELINE_COLUMNS"]
