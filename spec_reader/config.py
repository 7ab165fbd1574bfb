from dataclasses import dataclass
import os


def _bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if not value:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class ReaderConfig:
    keyword: str = "UNIT MASONRY"
    footer_fraction: float = 0.10
    case_sensitive: bool = True
    stop_after_first_run: bool = False
    session_ttl_seconds: float = 3600.0
    max_upload_mb: int = 100

    @classmethod
    def from_env(cls) -> "ReaderConfig":
        def _float(name: str, default: float) -> float:
            value = os.environ.get(name)
            return float(value) if value else default

        def _int(name: str, default: int) -> int:
            value = os.environ.get(name)
            return int(value) if value else default

        return cls(
            keyword=os.environ.get("SPEC_KEYWORD", cls.keyword),
            footer_fraction=_float("SPEC_FOOTER_FRACTION", cls.footer_fraction),
            case_sensitive=_bool("SPEC_CASE_SENSITIVE", cls.case_sensitive),
            stop_after_first_run=_bool("SPEC_STOP_AFTER_FIRST_RUN", cls.stop_after_first_run),
            session_ttl_seconds=_float("SESSION_TTL_SECONDS", cls.session_ttl_seconds),
            max_upload_mb=_int("MAX_UPLOAD_MB", cls.max_upload_mb),
        )
