from __future__ import annotations

from dataclasses import dataclass

import httpx

from okit_boost.adapters.memory_backend import InMemoryAuth, InMemoryTables
from okit_boost.adapters.postgrest import GoTrueAuth, PostgrestTables, create_http_client
from okit_boost.components.accounts import AccountService
from okit_boost.components.catalog import CatalogService
from okit_boost.components.orders import CheckoutService, OrderAdminService
from okit_boost.components.trials import TrialService
from okit_boost.config.models import AppConfig
from okit_boost.ports.remote import AuthPort, TablePort


@dataclass
class ServiceContext:
    config: AppConfig
    tables: TablePort
    auth: AuthPort
    catalog_service: CatalogService
    trial_service: TrialService
    account_service: AccountService
    order_service: OrderAdminService
    checkout_service: CheckoutService
    http_client: httpx.Client | None = None

    @classmethod
    def from_ports(
        cls,
        config: AppConfig,
        tables: TablePort,
        auth: AuthPort,
        http_client: httpx.Client | None = None,
    ) -> ServiceContext:
        return cls(
            config=config,
            tables=tables,
            auth=auth,
            catalog_service=CatalogService(tables),
            trial_service=TrialService(tables),
            account_service=AccountService(tables, auth),
            order_service=OrderAdminService(tables),
            checkout_service=CheckoutService(tables),
            http_client=http_client,
        )

    @classmethod
    def create(cls, config: AppConfig) -> ServiceContext:
        if config.remote.backend == "memory":
            return cls.from_ports(config, InMemoryTables(), InMemoryAuth())

        client = create_http_client(config.remote)
        return cls.from_ports(config, PostgrestTables(client), GoTrueAuth(client), client)

    def close(self) -> None:
        if self.http_client is not None:
            self.http_client.close()
