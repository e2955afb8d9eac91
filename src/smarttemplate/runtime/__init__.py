from .container import EngineBuilder, EngineConfig, build_engine

__all__ = ["EngineBuilder", "EngineConfig", "build_engine"]
