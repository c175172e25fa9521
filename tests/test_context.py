"""Tests for the run context and variable resolution."""

import pytest

from ennio.context import (
    Context,
    ContextConsumedError,
    ContextView,
    InvalidSyntaxError,
    MissingVarNameError,
    UnknownActionError,
    UnknownVarError,
    VariableError,
)
from ennio.output import Output, Status
from ennio.value import Bool, List, PositiveInt, String


@pytest.fixture
def ctx():
    """Context where action1 produced foo=15."""
    context = Context("workflow1")
    context.update("action1", Output(Status.CHANGED).add_var("foo", PositiveInt(15)))
    return context


class TestContextOutputs:
    """Tests for recording and reading outputs."""

    def test_new_context_is_empty(self):
        context = Context("workflow1")
        assert context.workflow_name == "workflow1"
        assert dict(context.outputs) == {}

    def test_output_before_update(self):
        assert Context("workflow1").output("action1") is None

    def test_output_after_update(self):
        context = Context("workflow1")
        output = Output(Status.CHANGED).add_var("a", 1)
        context.update("action1", output)
        assert context.output("action1") == output

    def test_outputs_in_execution_order(self):
        context = Context("workflow1")
        for name in ["c", "a", "b"]:
            context.update(name, Output(Status.UNCHANGED))
        assert list(context.outputs) == ["c", "a", "b"]

    def test_outputs_is_read_only(self, ctx):
        with pytest.raises(TypeError):
            ctx.outputs["other"] = Output(Status.CHANGED)

    def test_update_overwrites(self, ctx):
        replacement = Output(Status.FAILED)
        ctx.update("action1", replacement)
        assert ctx.output("action1") == replacement

    def test_value(self, ctx):
        assert ctx.value("action1", "foo") == PositiveInt(15)
        assert ctx.value("action1", "bar") is None
        assert ctx.value("action2", "foo") is None


class TestResolve:
    """Tests for <action>.<field> reference resolution."""

    def test_resolve_value(self, ctx):
        assert ctx.resolve("action1.foo") == PositiveInt(15)

    def test_resolve_follows_updates(self, ctx):
        """No caching: a new update changes the resolved value."""
        ctx.update("action1", Output(Status.CHANGED).add_var("foo", "new"))
        assert ctx.resolve("action1.foo") == String("new")

    def test_invalid_syntax(self, ctx):
        with pytest.raises(InvalidSyntaxError) as exc_info:
            ctx.resolve("éè")
        assert exc_info.value.reference == "éè"

    @pytest.mark.parametrize("reference", ["", ".foo", "action-1.foo", "action1:foo", " action1.foo"])
    def test_invalid_syntax_cases(self, ctx, reference):
        with pytest.raises(InvalidSyntaxError):
            ctx.resolve(reference)

    def test_unknown_action(self, ctx):
        with pytest.raises(UnknownActionError) as exc_info:
            ctx.resolve("unknownaction.foo")
        assert exc_info.value.action == "unknownaction"

    def test_unknown_action_checked_before_var_name(self, ctx):
        """An unknown action wins over a missing field name."""
        with pytest.raises(UnknownActionError):
            ctx.resolve("unknownaction")

    def test_missing_var_name(self, ctx):
        with pytest.raises(MissingVarNameError):
            ctx.resolve("action1")

    def test_empty_var_name(self, ctx):
        with pytest.raises(MissingVarNameError):
            ctx.resolve("action1.")

    def test_unknown_var(self, ctx):
        with pytest.raises(UnknownVarError) as exc_info:
            ctx.resolve("action1.missing")
        assert exc_info.value.action == "action1"
        assert exc_info.value.var == "missing"

    def test_field_name_taken_verbatim(self, ctx):
        """Everything after the first separator is the field name."""
        ctx.update("action2", Output(Status.CHANGED).add_var("a.b c-d", Bool(True)))
        assert ctx.resolve("action2.a.b c-d") == Bool(True)

    def test_errors_share_base_class(self, ctx):
        for reference in ["éè", "nope.x", "action1", "action1.missing"]:
            with pytest.raises(VariableError):
                ctx.resolve(reference)


class TestRender:
    """Tests for ${...} interpolation."""

    def test_render(self, ctx):
        assert ctx.render("count=${action1.foo}") == "count=15"

    def test_render_multiple(self, ctx):
        ctx.update("action2", Output(Status.CHANGED).add_var("tags", List([String("a")])).add_var("ok", True))
        assert ctx.render("${action2.tags} ${action2.ok} ${action1.foo}") == '["a"] true 15'

    def test_render_without_placeholders(self, ctx):
        assert ctx.render("echo $HOME") == "echo $HOME"

    def test_render_escape(self, ctx):
        assert ctx.render("$${action1.foo}") == "${action1.foo}"

    def test_render_propagates_errors(self, ctx):
        with pytest.raises(UnknownVarError):
            ctx.render("${action1.missing}")


class TestConsumedContext:
    """Tests for the consumed phase after take_outputs."""

    def test_take_outputs(self, ctx):
        outputs = ctx.take_outputs()
        assert outputs == {"action1": Output(Status.CHANGED).add_var("foo", PositiveInt(15))}
        assert ctx.consumed

    @pytest.mark.parametrize(
        "use",
        [
            lambda c: c.take_outputs(),
            lambda c: c.output("action1"),
            lambda c: c.outputs,
            lambda c: c.update("action2", Output(Status.CHANGED)),
            lambda c: c.resolve("action1.foo"),
            lambda c: c.render("x"),
            lambda c: c.value("action1", "foo"),
            lambda c: c.workflow_name,
        ],
    )
    def test_use_after_take_fails_fast(self, ctx, use):
        ctx.take_outputs()
        with pytest.raises(ContextConsumedError):
            use(ctx)


class TestContextView:
    """Tests for the read-only view handed to actions."""

    def test_reads_through(self, ctx):
        view = ctx.view()
        assert isinstance(view, ContextView)
        assert view.workflow_name == "workflow1"
        assert view.output("action1") == ctx.output("action1")
        assert view.value("action1", "foo") == PositiveInt(15)
        assert view.resolve("action1.foo") == PositiveInt(15)
        assert view.render("n=${action1.foo}") == "n=15"
        assert list(view.outputs) == ["action1"]

    def test_sees_later_updates(self, ctx):
        view = ctx.view()
        ctx.update("action2", Output(Status.UNCHANGED))
        assert view.output("action2") == Output(Status.UNCHANGED)

    @pytest.mark.parametrize("name", ["update", "take_outputs", "view", "consumed"])
    def test_has_no_writers(self, ctx, name):
        assert not hasattr(ctx.view(), name)

    def test_cannot_grow_attributes(self, ctx):
        view = ctx.view()
        with pytest.raises(AttributeError):
            view.update = ctx.update

    def test_recorded_output_cannot_be_changed(self, ctx):
        view = ctx.view()
        with pytest.raises(TypeError):
            view.output("action1").vars["foo"] = PositiveInt(0)
        with pytest.raises(TypeError):
            view.outputs["action1"] = Output(Status.FAILED)
        assert ctx.value("action1", "foo") == PositiveInt(15)

    def test_consumed_context(self, ctx):
        view = ctx.view()
        ctx.take_outputs()
        with pytest.raises(ContextConsumedError):
            view.output("action1")
