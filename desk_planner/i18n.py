import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional
from desk_planner.config import Settings

LOCALES_DIR = Path(__file__).parent / "data" / "locales"

@lru_cache(maxsize=None)
def _load_file(path: Path) -> Dict[str, Any]:
	with open(path, encoding="utf-8") as file:
		return json.load(file)

class Localizer:
	"""
	Dotted-key templates. The first part names a file in
	``data/locales/<lang>/``, the rest is the path inside it, so
	``teams.list.item`` is ``list.item`` of ``teams.json``.
	"""
	def __init__(self, lang: Optional[str] = None):
		self.lang = lang if lang is not None else Settings().default_language
		self.locale_dir = LOCALES_DIR / self.lang

	def template(self, key: str) -> str:
		file_name, _, inner = key.partition(".")
		path = self.locale_dir / f"{file_name}.json"
		if not inner or not path.is_file():
			raise KeyError(f"Key {key} is not found in {self.locale_dir}")

		node: Any = _load_file(path)
		for part in inner.split("."):
			if not isinstance(node, dict) or part not in node:
				raise KeyError(f"Key {key} is not found")
			node = node[part]

		if not isinstance(node, str):
			raise KeyError(f"Key {key} is not a template")
		return node

	def get(self, key: str, **kwargs: Any) -> str:
		return self.template(key).format(**kwargs)

	def __call__(self, key: str, **kwargs: Any) -> str:
		return self.get(key, **kwargs)
