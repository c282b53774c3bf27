"""Pricing, goal and company settings service."""

import json
import logging
from dataclasses import asdict, fields
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Optional

from lessonledger.domain.entities import CompanyInfo, PricingConfiguration
from lessonledger.domain.errors import StorageUnavailable, ValidationError

if TYPE_CHECKING:
    from lessonledger.database.base import SettingsStore

logger = logging.getLogger(__name__)

MONTHLY_GOAL_KEY = "monthlyGoal"
REGULAR_PRICE_KEY = "regularLessonPrice"
MASTER_PRICE_KEY = "masterClassPrice"
COMPANY_INFO_KEY = "companyInfo"

# Stored companyInfo JSON keys, by CompanyInfo field
COMPANY_JSON_KEYS = {
    "name": "name",
    "address": "address",
    "city": "city",
    "postal_code": "postalCode",
    "ico": "ico",
    "dic": "dic",
    "bank_account": "bankAccount",
    "swift": "swift",
    "last_invoice_number": "lastInvoiceNumber",
}


def _decimal_or_default(value: Optional[str], default: Decimal, key: str) -> Decimal:
    if value is None:
        return default
    try:
        parsed = Decimal(value)
    except InvalidOperation:
        logger.warning(f"Ignoring invalid stored value for {key}: {value!r}")
        return default
    return parsed if parsed.is_finite() else default


def validate_pricing(config: PricingConfiguration) -> None:
    """Check prices are positive and the goal is non-negative.

    Raises:
        ValidationError: If any value is out of range
    """
    if config.regular_lesson_price <= 0:
        raise ValidationError("Regular lesson price must be positive")
    if config.master_class_price <= 0:
        raise ValidationError("Master class price must be positive")
    if config.monthly_goal < 0:
        raise ValidationError("Monthly goal must not be negative")


def company_to_json(info: CompanyInfo) -> str:
    """Serialize company info to its stored JSON form."""
    data = asdict(info)
    return json.dumps({COMPANY_JSON_KEYS[k]: v for k, v in data.items()})


def company_from_json(value: str) -> CompanyInfo:
    """Deserialize stored company info; unknown keys are ignored.

    Raises:
        ValueError: If the JSON is invalid or the counter is not an integer
    """
    data = json.loads(value)
    if not isinstance(data, dict):
        raise ValueError("Company info must be a JSON object")
    kwargs = {}
    for f in fields(CompanyInfo):
        json_key = COMPANY_JSON_KEYS[f.name]
        if json_key in data:
            kwargs[f.name] = data[json_key]
    if "last_invoice_number" in kwargs:
        kwargs["last_invoice_number"] = int(kwargs["last_invoice_number"])
    return CompanyInfo(**kwargs)


class SettingsService:
    """Service for loading and saving pricing, goal and company settings.

    Settings are persisted immediately on save, each under its own key.
    """

    def __init__(self, store: "SettingsStore"):
        """Initialize settings service.

        Args:
            store: Key-value settings store
        """
        self.store = store

    def _get(self, key: str) -> Optional[str]:
        try:
            return self.store.get(key)
        except StorageUnavailable as e:
            logger.warning(f"Settings unavailable, using defaults for {key}: {e}")
            return None

    def load_settings(self) -> PricingConfiguration:
        """Load pricing configuration, falling back to built-in defaults."""
        defaults = PricingConfiguration()
        return PricingConfiguration(
            regular_lesson_price=_decimal_or_default(
                self._get(REGULAR_PRICE_KEY),
                defaults.regular_lesson_price,
                REGULAR_PRICE_KEY,
            ),
            master_class_price=_decimal_or_default(
                self._get(MASTER_PRICE_KEY),
                defaults.master_class_price,
                MASTER_PRICE_KEY,
            ),
            monthly_goal=_decimal_or_default(
                self._get(MONTHLY_GOAL_KEY), defaults.monthly_goal, MONTHLY_GOAL_KEY
            ),
        )

    def save_settings(self, config: PricingConfiguration) -> None:
        """Validate and persist pricing configuration.

        Raises:
            ValidationError: If prices or goal are out of range
            StorageWriteFailed: If the store cannot be written
        """
        validate_pricing(config)
        self.store.set(MONTHLY_GOAL_KEY, str(config.monthly_goal))
        self.store.set(REGULAR_PRICE_KEY, str(config.regular_lesson_price))
        self.store.set(MASTER_PRICE_KEY, str(config.master_class_price))
        logger.info(
            f"Saved settings: regular={config.regular_lesson_price} "
            f"master={config.master_class_price} goal={config.monthly_goal}"
        )

    def load_company_info(self) -> CompanyInfo:
        """Load company info, falling back to defaults."""
        value = self._get(COMPANY_INFO_KEY)
        if value is None:
            return CompanyInfo()
        try:
            return company_from_json(value)
        except (ValueError, TypeError) as e:
            logger.warning(f"Ignoring invalid stored company info: {e}")
            return CompanyInfo()

    def save_company_info(self, info: CompanyInfo) -> None:
        """Persist company info.

        Raises:
            ValidationError: If the invoice counter is negative
            StorageWriteFailed: If the store cannot be written
        """
        if info.last_invoice_number < 0:
            raise ValidationError("Last invoice number must not be negative")
        self.store.set(COMPANY_INFO_KEY, company_to_json(info))
