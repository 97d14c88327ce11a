"""
Central agent registry and registration decorator for the computer's dice selection.
Use @register_agent("name") above your agent class to make it available to the CLI.
All agent modules in this directory are imported here so registration occurs.
"""

AGENT_MAP = {}

def register_agent(name):
	"""
	Decorator to register an agent class under a given name.
	Usage:
		@register_agent("random")
		class RandomAgent(Agent): ...
	"""
	def decorator(cls):
		AGENT_MAP[name] = cls
		return cls
	return decorator


def choose_agent(name, **kwargs):
	"""
	Return an Agent instance by name.
	Raises:
		ValueError: If the agent name is unknown.
	"""
	key = name.lower()
	if key in AGENT_MAP:
		return AGENT_MAP[key](**kwargs)
	raise ValueError(f"Unknown agent: {name} (available: {', '.join(sorted(AGENT_MAP))})")

# Automatically import all agent modules in this directory to ensure registration decorators run
import importlib
import os
import pkgutil

_this_dir = os.path.dirname(__file__)
_pkg_name = __name__
for _, modname, ispkg in pkgutil.iter_modules([_this_dir]):
	if not ispkg and modname not in ("__init__", "base"):
		importlib.import_module(f"{_pkg_name}.{modname}")
