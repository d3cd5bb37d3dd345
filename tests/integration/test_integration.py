"""Integration tests for end-to-end declaration expansion."""

import pytest

from attr_shortcuts import (
    KIND_DEFAULTS,
    AttributeBuilder,
    Directive,
    DuplicateOption,
    InvalidPassResult,
    Kind,
    ShortcutPass,
    TriggerDispatch,
    UnsupportedMultiName,
    literal,
)


def make_items():
    return []


class Int:
    """Stand-in for a type-constraint object with a coercion."""


class TestKindDefaults:
    """Declarations without options give exactly the kind defaults."""

    def test_field(self, builder):
        """field defaults to read-only without init_arg."""
        assert builder.field("x") == ("x", {"is": "ro", "init_arg": None})

    def test_param(self, builder):
        """param defaults to read-only and required."""
        assert builder.param("x") == ("x", {"is": "ro", "required": True})

    def test_option(self, builder):
        """option defaults to optional with a has_ predicate."""
        assert builder.option("x") == ("x", {"is": "ro", "required": False, "predicate": "has_x"})

    def test_option_hidden(self, builder):
        """A hidden option gets a hidden predicate."""
        assert builder.option("_x")[1]["predicate"] == "_has_x"

    @pytest.mark.parametrize("kind", list(Kind))
    def test_keys_match_table(self, builder, kind):
        """Only the kind-default keys are produced."""
        assert set(builder.expand(kind, "x")) == set(KIND_DEFAULTS[kind])


class TestDeclarations:
    """Realistic declarations through every built-in shortcut."""

    def test_param_with_falsy_default_not_required(self, builder):
        """A param with a falsy default is not required."""
        _, options = builder.param("x", default=0)
        assert options == {"is": "ro", "default": 0}

    def test_reader_names(self, builder):
        """Reader names follow the property visibility."""
        assert builder.field("_secret", reader=True)[1]["reader"] == "_get_secret"
        assert builder.field("secret", reader=True)[1]["reader"] == "get_secret"

    def test_builder_always_hidden(self, builder):
        """builder=True is hidden even for a public name."""
        assert builder.field("x", builder=True)[1]["builder"] == "_build_x"

    def test_lazy_callable(self, builder):
        """lazy callable gives lazy=True and a default."""
        _, options = builder.field("x", lazy=make_items)

        assert options["lazy"] is True
        assert options["default"] is make_items
        assert "builder" not in options

    def test_lazy_name(self, builder):
        """lazy name gives lazy=True and a builder."""
        _, options = builder.field("x", lazy="make_x")
        assert options == {"is": "ro", "init_arg": None, "lazy": True, "builder": "make_x"}

    def test_lazy_true_inflates_builder(self, builder):
        """lazy=True ends up as a hidden builder name."""
        _, options = builder.param("_cache", lazy=True)
        assert options == {"is": "ro", "lazy": True, "builder": "_build_cache"}

    def test_lazy_with_explicit_default(self, builder):
        """lazy callable with a default raises DuplicateOption."""
        with pytest.raises(DuplicateOption):
            builder.field("x", lazy=make_items, default=[])

    def test_coerce_type(self, builder):
        """coerce type becomes isa plus coerce=True."""
        _, options = builder.param("count", coerce=Int)
        assert options == {"is": "ro", "required": True, "isa": Int, "coerce": True}

    def test_coerce_flag_untouched(self, builder):
        """coerce=True with isa is left alone."""
        _, options = builder.param("count", isa=Int, coerce=True)
        assert options == {"is": "ro", "required": True, "isa": Int, "coerce": True}

    def test_coerce_with_explicit_isa(self, builder):
        """coerce type with isa raises DuplicateOption."""
        with pytest.raises(DuplicateOption):
            builder.param("count", coerce=Int, isa=int)

    def test_option_public_init_arg(self, builder):
        """Forced-public init_arg next to hidden methods."""
        _, options = builder.option("_size", init_arg=Directive.PUBLIC, writer=True)
        assert options == {
            "is": "ro",
            "required": False,
            "predicate": "_has_size",
            "init_arg": "size",
            "writer": "_set_size",
        }

    def test_trigger_directive(self, builder):
        """trigger=True dispatches to the hidden trigger method."""
        class Counter:
            def __init__(self):
                self.calls = []

            def _trigger_count(self, value):
                self.calls.append(value)

        _, options = builder.param("count", trigger=True)
        assert options["trigger"] == TriggerDispatch("_trigger_count")

        counter = Counter()
        options["trigger"](counter, 3)
        assert counter.calls == [3]

    def test_trigger_callable_kept(self, builder):
        """A trigger callable is kept as is."""
        def on_change(instance, value):
            return value

        assert builder.param("x", trigger=on_change)[1]["trigger"] is on_change

    def test_extended(self, builder):
        """extended marks the name and adds no defaults."""
        assert builder.extended("x", {"is": "rw"}) == ("+x", {"is": "rw"})

    def test_extended_list(self, builder):
        """extended marks every name of a list."""
        assert builder.extended(["a", "b"], required=False) == (["+a", "+b"], {"required": False})

    def test_extended_shortcuts_use_plain_name(self, builder):
        """extended inflates from the unmarked name."""
        assert builder.extended("_x", reader=True) == ("+_x", {"reader": "_get_x"})

    def test_multi_name_with_directive(self, builder):
        """Method shortcuts with several names raise UnsupportedMultiName."""
        with pytest.raises(UnsupportedMultiName):
            builder.field(["a", "b"], reader=True)

    def test_multi_name_without_directive(self, builder):
        """Several names work without method shortcuts."""
        assert builder.param(["a", "b"]) == (["a", "b"], {"is": "ro", "required": True})

    def test_caller_options_untouched(self, builder):
        """The caller mapping is not modified."""
        options = {"lazy": "make_x", "reader": True}
        builder.field("x", options)
        assert options == {"lazy": "make_x", "reader": True}


class TestLiteralEscapes:
    """Escaped keys bypass every other shortcut."""

    def test_escaped_lazy_not_merged(self, builder):
        """An escaped lazy is not merged."""
        _, options = builder.field("x", {literal("lazy"): make_items})
        assert options == {"is": "ro", "init_arg": None, "lazy": make_items}

    def test_escaped_required_survives_default(self, builder):
        """An escaped required survives a default."""
        _, options = builder.param("x", {"default": 1, literal("required"): True})
        assert options == {"is": "ro", "default": 1, "required": True}

    def test_escaped_directive_kept_verbatim(self, builder):
        """An escaped directive is kept verbatim."""
        _, options = builder.field("x", {literal("reader"): True})
        assert options["reader"] is True

    def test_escaped_init_arg_overrides_kind_default(self, builder):
        """An escaped key overrides a kind default."""
        _, options = builder.field("x", {literal("init_arg"): "x"})
        assert options["init_arg"] == "x"

    def test_reexpansion_is_stable(self, builder):
        """Expanding escaped output again changes nothing."""
        _, first = builder.extended("x", {literal("a"): 1, literal("b"): "two"})
        _, second = builder.extended("x", {literal(k): v for k, v in first.items()})
        assert second == first == {"a": 1, "b": "two"}


class TestCustomShortcuts:
    """Custom shortcuts run first, in registration order."""

    def test_order(self, registry, builder):
        """Custom shortcuts run before built-ins, in registration order."""
        calls = []

        class Recorder(ShortcutPass):
            def __init__(self, label):
                self.label = label

            def apply(self, name, options):
                calls.append((self.label, dict(options)))
                return options

        registry.register(Recorder("A"))
        registry.register(Recorder("B"))
        builder.param("x", default=1)

        assert [label for label, _ in calls] == ["A", "B"]
        # Nothing built in has run yet: no kind defaults, kind still present
        assert all(seen == {"default": 1, "_kind": Kind.PARAM} for _, seen in calls)

    def test_custom_shortcut_feeds_builtin(self, registry, builder):
        """A custom shortcut can emit options for built-ins to expand."""
        def cached(name, options):
            if options.pop("cached", False):
                options["lazy"] = True
                options["clearer"] = True
            return options

        registry.register(cached)
        _, options = builder.field("_cache", cached=True)

        assert options == {
            "is": "ro",
            "init_arg": None,
            "lazy": True,
            "builder": "_build_cache",
            "clearer": "_clear_cache",
        }

    def test_custom_shortcut_can_change_kind(self, registry, builder):
        """A custom shortcut can switch the kind."""
        def promote(name, options):
            if options.pop("public", False):
                options["_kind"] = Kind.OPTION
            return options

        registry.register(promote)
        assert builder.field("x", public=True)[1]["predicate"] == "has_x"

    def test_standard_builder_on_same_registry(self, registry, builder):
        """A standard builder skips custom shortcuts of a shared registry."""
        registry.register(lambda name, options: {**options, "custom": True})

        assert "custom" in builder.field("x")[1]
        assert "custom" not in AttributeBuilder(registry, standard=True).field("x")[1]

    def test_custom_shortcut_unknown_kind(self, registry, builder):
        """A custom shortcut renaming the kind to an unknown one removes the defaults."""

        def retag(name, options):
            options["_kind"] = "attribute"
            return options

        registry.register(retag)
        assert builder.param("x", {"is": "rw"}) == ("x", {"is": "rw"})

    def test_failing_custom_shortcut_named_in_error(self, registry, builder):
        """A custom shortcut returning a non-mapping is named by its function name."""

        def broken(name, options):
            return [name]

        registry.register(broken)
        with pytest.raises(InvalidPassResult) as exc:
            builder.field("x")
        assert exc.value.pass_name == "broken"
        assert "'broken'" in str(exc.value)
