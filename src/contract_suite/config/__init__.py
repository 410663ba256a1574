from contract_suite.config.settings import Settings, settings

__all__ = ["Settings", "settings"]
