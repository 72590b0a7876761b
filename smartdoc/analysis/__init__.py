from smartdoc.analysis.analyzer import Analyzer
from smartdoc.analysis.client_base import BaseAnalysisClient
from smartdoc.analysis.factory import AnalysisClientFactory

__all__ = ["AnalysisClientFactory", "Analyzer", "BaseAnalysisClient"]
