"""Per-vendor envelope compatibility lookups."""

from __future__ import annotations

from balloonquote.models import CompatibilityRule


class CompatibilityTable:
    """Which baskets and burners may accompany a given envelope.

    A missing vendor or envelope resolves to empty lists; callers treat that
    as "nothing is compatible", never as "no restriction".
    """

    def __init__(self, rules: dict[str, dict[str, CompatibilityRule]] | None = None) -> None:
        self._rules = rules or {}

    def rule_for(self, vendor_id: str, envelope_name: str) -> CompatibilityRule | None:
        return self._rules.get(vendor_id, {}).get(envelope_name)

    def compatible_baskets(self, vendor_id: str, envelope_name: str) -> list[str]:
        rule = self.rule_for(vendor_id, envelope_name)
        return list(rule.baskets) if rule is not None else []

    def compatible_burners(self, vendor_id: str, envelope_name: str) -> list[str]:
        rule = self.rule_for(vendor_id, envelope_name)
        return list(rule.burners) if rule is not None else []

    def is_basket_compatible(self, vendor_id: str, envelope_name: str, basket_name: str) -> bool:
        return basket_name in self.compatible_baskets(vendor_id, envelope_name)

    def is_burner_compatible(self, vendor_id: str, envelope_name: str, burner_name: str) -> bool:
        return burner_name in self.compatible_burners(vendor_id, envelope_name)
