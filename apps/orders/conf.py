"""
Supply-chain configuration.

Settings live in ``settings.SUPPLY_CHAIN``; services receive them as an
immutable ``SupplyChainConfig`` at construction instead of reading module
globals.
"""
from dataclasses import dataclass

from django.conf import settings


@dataclass(frozen=True)
class SupplyChainConfig:
    order_number_prefix: str = 'PO'
    order_number_max_retries: int = 5
    currency_label: str = 'Rs.'
    kitchen_orders_link: str = '/kitchen/orders'
    franchise_orders_link: str = '/franchise/orders'
    kitchen_discrepancies_link: str = '/kitchen/discrepancies'

    @classmethod
    def from_settings(cls):
        raw = getattr(settings, 'SUPPLY_CHAIN', {})
        links = raw.get('LINKS', {})
        defaults = cls()
        return cls(
            order_number_prefix=raw.get('ORDER_NUMBER_PREFIX', defaults.order_number_prefix),
            order_number_max_retries=raw.get(
                'ORDER_NUMBER_MAX_RETRIES', defaults.order_number_max_retries
            ),
            currency_label=raw.get('CURRENCY_LABEL', defaults.currency_label),
            kitchen_orders_link=links.get('KITCHEN_ORDERS', defaults.kitchen_orders_link),
            franchise_orders_link=links.get('FRANCHISE_ORDERS', defaults.franchise_orders_link),
            kitchen_discrepancies_link=links.get(
                'KITCHEN_DISCREPANCIES', defaults.kitchen_discrepancies_link
            ),
        )
