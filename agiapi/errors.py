from __future__ import annotations


class AgiApiError(Exception):
	"""Base class for errors raised by the documentation engine."""


class ConfigError(AgiApiError):
	pass


class ModuleLoadError(AgiApiError):
	def __init__(self, path: str, reason: str):
		super().__init__(f"{path}: {reason}")
		self.path = path
		self.reason = reason
