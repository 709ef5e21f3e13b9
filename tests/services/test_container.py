from __future__ import annotations

from services import ServiceContainer


class CounterService:
    instances = 0

    def __init__(self) -> None:
        CounterService.instances += 1


def test_resolve_creates_one_instance_per_type() -> None:
    CounterService.instances = 0
    services = ServiceContainer()

    first = services.resolve(CounterService)
    second = services.resolve(CounterService)

    assert first is second
    assert CounterService.instances == 1
    assert CounterService in services


def test_register_binds_an_explicit_instance() -> None:
    services = ServiceContainer()
    instance = CounterService()

    assert services.register(CounterService, instance) is instance
    assert services.resolve(CounterService) is instance


def test_containers_do_not_share_instances() -> None:
    assert ServiceContainer().resolve(CounterService) is not ServiceContainer().resolve(CounterService)


def test_registered_none_is_not_replaced() -> None:
    services = ServiceContainer()
    services.register(CounterService, None)

    assert services.resolve(CounterService) is None
