from typing import Optional

from linkscout.domain.check_options import DEFAULT_CONCURRENCY, CheckOptions
from linkscout.exceptions import InvalidCheckOptionsError


class CheckOptionsParser:
    """Parse a YAML (or JSON) dict into `CheckOptions`.

    Responsibility: schema/validation for option files. It does NOT perform
    filesystem IO. Keyword overrides (from CLI flags) win over file values
    when not None.
    """

    def __init__(self, default_concurrency: int = DEFAULT_CONCURRENCY):
        self.default_concurrency = default_concurrency

    def parse(self, data: Optional[dict] = None, **overrides) -> CheckOptions:
        merged = dict(data or {})
        if "links_to_skip" not in merged and "skip" in merged:
            merged["links_to_skip"] = merged.pop("skip")
        for key, value in overrides.items():
            if value is not None:
                merged[key] = value

        path = merged.get("path")
        if not path:
            raise InvalidCheckOptionsError("path is required")

        skips = merged.get("links_to_skip") or []
        if isinstance(skips, str):
            skips = [skips]
        if not isinstance(skips, (list, tuple)):
            raise InvalidCheckOptionsError(f"links_to_skip must be a string or list, got {type(skips).__name__}")

        return CheckOptions(
            path=str(path),
            concurrency=self._int(merged, "concurrency", self.default_concurrency),
            port=self._int(merged, "port", None),
            recurse=self._bool(merged.get("recurse", False)),
            links_to_skip=list(skips),
        )

    def _int(self, data: dict, key: str, default):
        raw = data.get(key)
        if raw is None:
            return default
        if isinstance(raw, bool):
            raise InvalidCheckOptionsError(f"{key} must be an integer, got {raw!r}")
        try:
            return int(raw)
        except (TypeError, ValueError) as e:
            raise InvalidCheckOptionsError(f"{key} must be an integer, got {raw!r}") from e

    def _bool(self, raw) -> bool:
        if isinstance(raw, str):
            return raw.strip().lower() in ("1", "true", "yes", "on")
        return bool(raw)
