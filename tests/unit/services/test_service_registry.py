"""
Unit tests for the service registry
"""

import pytest
from services.service_registry import ServiceRegistry


class TestServiceRegistry:

    @pytest.fixture
    def registry(self):
        return ServiceRegistry()

    def test_factories_are_lazy(self, registry):
        calls = []
        registry.register_factory('thing', lambda: calls.append(1) or object())

        assert calls == []
        registry.get('thing')
        assert calls == [1]

    def test_service_built_once(self, registry):
        registry.register_factory('thing', object)
        assert registry.get('thing') is registry.get('thing')

    def test_registered_instance_returned_as_is(self, registry):
        session = object()
        registry.register_instance('db_session', session)
        assert registry.get('db_session') is session

    def test_dependencies_passed_by_name(self, registry):
        registry.register_instance('db_session', 'session')
        registry.register_factory('repo', lambda db_session: ('repo', db_session), dependencies=['db_session'])

        assert registry.get('repo') == ('repo', 'session')

    def test_unregistered_service(self, registry):
        with pytest.raises(ValueError):
            registry.get('missing')

    def test_circular_dependency(self, registry):
        registry.register_factory('a', lambda b: b, dependencies=['b'])
        registry.register_factory('b', lambda a: a, dependencies=['a'])

        with pytest.raises(RuntimeError):
            registry.get('a')
        with pytest.raises(RuntimeError):
            registry.get_initialization_order()

    def test_validate_dependencies(self, registry):
        registry.register_factory('a', lambda b: b, dependencies=['b'])
        assert registry.validate_dependencies() == ["Service 'a' depends on unregistered service 'b'"]

    def test_initialization_order(self, registry):
        registry.register_factory('service', lambda repo: repo, dependencies=['repo'])
        registry.register_factory('repo', lambda db_session: db_session, dependencies=['db_session'])
        registry.register_instance('db_session', 'session')

        order = registry.get_initialization_order()

        assert order.index('db_session') < order.index('repo') < order.index('service')

    def test_app_registers_every_service(self, app):
        for name in ('volunteer', 'fund_request', 'fund_request_mailer', 'email', 'auth', 'casa_case'):
            assert app.services.get(name) is not None
        assert app.services.validate_dependencies() == []
