"""Environment-driven settings for the order core.

Every value can be overridden with a ``POS_*`` environment variable;
defaults are suitable for local development (SQLite file next to the
working directory, in-process logging to stderr).
"""

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Runtime configuration.

    Attributes:
        storage_backend: ``"sql"`` for the SQLAlchemy store or ``"memory"``.
        database_url: SQLAlchemy URL used by the ``sql`` backend.
        shop_name: Heading of the shared order summary.
        currency_label: Prefix used when formatting amounts.
        placeholder_image_url: Template with a ``{seed}`` field used for
            lines that carry no image of their own.
        restore_draft: Reload the persisted current order on startup
            instead of starting from an empty draft.
        share_to_customer: Address the share link to the customer's phone.
        log_level: Root level for ``configure_logging``.
        log_json: Emit JSON log lines instead of plain text.
    """

    storage_backend: str = "sql"
    database_url: str = "sqlite:///furniture_pos.db"
    shop_name: str = "Rafiq Furniture House"
    currency_label: str = "Rs"
    placeholder_image_url: str = "https://picsum.photos/seed/{seed}/400/400"
    restore_draft: bool = False
    share_to_customer: bool = False
    log_level: str = "INFO"
    log_json: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``POS_*`` environment variables."""
        return cls(
            storage_backend=os.getenv("POS_STORAGE_BACKEND", cls.storage_backend).lower(),
            database_url=os.getenv("POS_DATABASE_URL", cls.database_url),
            shop_name=os.getenv("POS_SHOP_NAME", cls.shop_name),
            currency_label=os.getenv("POS_CURRENCY_LABEL", cls.currency_label),
            placeholder_image_url=os.getenv("POS_PLACEHOLDER_IMAGE_URL", cls.placeholder_image_url),
            restore_draft=_env_bool("POS_RESTORE_DRAFT", cls.restore_draft),
            share_to_customer=_env_bool("POS_SHARE_TO_CUSTOMER", cls.share_to_customer),
            log_level=os.getenv("POS_LOG_LEVEL", cls.log_level).upper(),
            log_json=_env_bool("POS_LOG_JSON", cls.log_json),
        )
