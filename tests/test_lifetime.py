import unittest

import pytest

from hookbind import ServiceContainer


class TestLifetimeControl(unittest.TestCase):
    cont: ServiceContainer

    def setUp(self):
        self.cont = ServiceContainer()

    def test_resolve_register_singleton_returns_same_instance(self):
        class A: ...

        self.cont.register(A, A, singleton=True)
        a1 = self.cont.resolve(A)
        a2 = self.cont.resolve(A)
        assert a2 is a1, "singleton should return the cached instance"

    def test_resolve_register_transient_returns_new_instances(self):
        class A:
            def __init__(self):
                self.items = []

        self.cont.register(A)
        a1 = self.cont.resolve(A)
        a2 = self.cont.resolve(A)
        assert a2 is not a1, "non-singleton should return new instances"

        a1.items.append("x")
        assert a2.items == []

    def test_register_singleton_self_registration_defaults_target_to_id(self):
        class Widget:
            def __init__(self):
                self.color = "red"

        self.cont.register_singleton(Widget)
        first = self.cont.resolve(Widget)
        second = self.cont.resolve(Widget)

        assert first is second
        first.color = "blue"
        assert second.color == "blue"

    def test_register_singleton_alias(self):
        class Widget: ...

        self.cont.register_singleton("widget", Widget)
        assert self.cont.resolve("widget") is self.cont.resolve("widget")
        assert self.cont.resolve(Widget) is not self.cont.resolve("widget")

    def test_register_instance_is_always_singleton(self):
        class A: ...

        inst = A()
        self.cont.register_instance(A, inst)
        a = self.cont.resolve(A)
        b = self.cont.resolve(A)
        assert a is inst
        assert b is inst

    def test_register_instance_twice_without_replace_raises_key_error(self):
        class A: ...

        self.cont.register_instance("a_instance", A())
        with pytest.raises(KeyError):
            self.cont.register_instance("a_instance", A())

    def test_register_instance_with_replace_option_substitutes_instance(self):
        class A: ...

        a1, a2 = A(), A()

        self.cont.register_instance(A, a1)
        self.cont.register_instance(A, a2, replace=True)

        assert self.cont.resolve(A) is a2


class TestReRegistration(unittest.TestCase):
    cont: ServiceContainer

    def setUp(self):
        self.cont = ServiceContainer()

    def test_registering_same_id_twice_uses_latest_registration(self):
        class First: ...

        class Second: ...

        self.cont.register("svc", First)
        self.cont.register("svc", Second)

        assert isinstance(self.cont.resolve("svc"), Second)
        assert self.cont.get_descriptor("svc").implementation_type is Second

    def test_re_registering_resolved_singleton_serves_new_registration(self):
        class First: ...

        class Second: ...

        self.cont.register_singleton("svc", First)
        first = self.cont.resolve("svc")

        self.cont.register_singleton("svc", Second)
        second = self.cont.resolve("svc")

        assert isinstance(first, First)
        assert isinstance(second, Second)
        assert self.cont.resolve("svc") is second

    def test_has_reports_registered_ids_only(self):
        class A: ...

        assert not self.cont.has("a")
        assert not self.cont.has(A)

        self.cont.register("a", A)

        assert self.cont.has("a")
        assert not self.cont.has(A)
