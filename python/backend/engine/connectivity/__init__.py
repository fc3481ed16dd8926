from backend.engine.connectivity.evaluator import ConnectivityEvaluator

__all__ = ["ConnectivityEvaluator"]
