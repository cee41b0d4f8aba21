import pytest

from formatr.environment import FilterRegistry, TemplateRegistry


class TestFilterRegistry:
    def test_builtins_present(self):
        registry = FilterRegistry()
        for name in ("upper", "lower", "trim", "plural", "slice", "pad", "truncate", "replace"):
            assert name in registry
        for name in ("number", "percent", "currency", "date"):
            assert name in registry

    def test_caller_filters_win(self):
        def shout(value):
            return f"{value}!"

        registry = FilterRegistry(filters={"upper": shout})
        assert registry["upper"] is shout
        assert registry.is_custom("upper")
        assert not registry.is_custom("lower")

    def test_names_in_registration_order(self):
        registry = FilterRegistry(filters={"zzz": str})
        names = registry.names()
        assert names[0] == "upper"
        assert names[-1] == "zzz"
        assert len(registry) == len(names)

    def test_locale_kept(self):
        assert FilterRegistry("de-DE").locale == "de-DE"

    def test_unknown_name(self):
        with pytest.raises(KeyError):
            FilterRegistry()["nope"]
        assert FilterRegistry().get("nope") is None


class TestTemplateRegistry:
    def test_register_and_get(self):
        registry = TemplateRegistry({"a": "A"})
        registry.register("b", "B")
        assert registry.get("b") == "B"
        assert registry.has("a")
        assert "b" in registry
        assert registry.list() == ["a", "b"]
        assert len(registry) == 2

    def test_unregister(self):
        registry = TemplateRegistry({"a": "A"})
        assert registry.unregister("a") is True
        assert registry.unregister("a") is False
        assert registry.get("a") is None

    def test_listeners_notified(self):
        registry = TemplateRegistry()
        calls: list[str] = []

        def listener():
            calls.append("changed")

        registry.subscribe(listener)
        registry.register("a", "A")
        registry.unregister("a")
        registry.unregister("a")  # no-op, no notification
        registry.clear()
        assert calls == ["changed"] * 3

        registry.unsubscribe(listener)
        registry.register("b", "B")
        assert len(calls) == 3

    def test_registering_clears_environment_cache(self, env):
        first = env.template("{a}")
        env.register_template("x", "X")
        assert env.cache_info()["size"] == 0
        assert env.template("{a}") is not first
