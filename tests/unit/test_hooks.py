"""Unit tests for the Hooks mixin (render_as / save_as on data types)."""

import pytest

from rapport.contexts.controller.builtin import (
    GroupController,
    GroupingController,
    RowController,
    TableController,
)
from rapport.contexts.controller.controller import Controller
from rapport.contexts.controller.exceptions import (
    ControllerNotSetError,
    FormatNotDetectedError,
    UnknownFormatError,
)
from rapport.contexts.controller.hooks import Hooks
from rapport.contexts.formatting.formatter import Formatter


class EchoFormatter(Formatter):
    """Writes repr(data) and the ``label`` option."""

    def build_body(self):
        self.output.write(f"{self.data!r}|{self.options.label}")


class EchoController(Controller):
    build_stages = ("body",)


EchoController.add_format(EchoFormatter, "echo")


class Unbound(Hooks):
    pass


# ============================================================================
# render_as
# ============================================================================


@pytest.mark.unit
def test_render_as_without_controller_raises():
    with pytest.raises(ControllerNotSetError) as exc_info:
        Unbound().render_as("csv")

    assert exc_info.value.type_name == "Unbound"


@pytest.mark.unit
def test_render_as_unknown_format_raises():
    class Ledger(Hooks):
        pass

    Ledger.renders_with(EchoController)

    with pytest.raises(UnknownFormatError) as exc_info:
        Ledger().render_as("pdf")

    assert exc_info.value.available == ["echo"]


@pytest.mark.unit
def test_render_as_renders_the_instance_itself():
    class Ledger(Hooks):
        def __repr__(self):
            return "Ledger()"

    Ledger.renders_with(EchoController)

    assert Ledger().render_as("echo") == "Ledger()|None"


@pytest.mark.unit
def test_render_as_prefers_renderable_data():
    class Ledger(Hooks):
        def __init__(self, amounts):
            self.amounts = amounts

        def renderable_data(self, format_id):
            return [a * 2 for a in self.amounts] if format_id == "echo" else self.amounts

    Ledger.renders_with(EchoController)

    assert Ledger([1, 2]).render_as("echo") == "[2, 4]|None"


@pytest.mark.unit
def test_rendering_options_precedence():
    class Ledger(list, Hooks):
        pass

    Ledger.renders_with(EchoController, label="type default")

    assert Ledger().render_as("echo") == "[]|type default"
    assert Ledger().render_as("echo", {"label": "mapping"}) == "[]|mapping"
    assert Ledger().render_as("echo", {"label": "mapping"}, label="kwarg") == "[]|kwarg"
    assert Ledger.rendering_options() == {"label": "type default"}


@pytest.mark.unit
def test_render_as_passes_configure():
    class Ledger(list, Hooks):
        pass

    Ledger.renders_with(EchoController)
    seen = []

    Ledger().render_as("echo", configure=lambda rend: seen.append(rend.format))

    assert seen == ["echo"]


@pytest.mark.unit
def test_renders_with_is_per_class():
    class Ledger(list, Hooks):
        pass

    Ledger.renders_with(EchoController)

    assert Ledger.controller() is EchoController
    assert Unbound.controller() is None


@pytest.mark.unit
def test_renders_as_shortcuts_bind_builtin_controllers():
    class A(Hooks):
        pass

    class B(Hooks):
        pass

    class C(Hooks):
        pass

    class D(Hooks):
        pass

    A.renders_as_table(show_table_headers=False)
    B.renders_as_row()
    C.renders_as_group()
    D.renders_as_grouping()

    assert A.controller() is TableController
    assert A.rendering_options() == {"show_table_headers": False}
    assert B.controller() is RowController
    assert C.controller() is GroupController
    assert D.controller() is GroupingController


# ============================================================================
# save_as
# ============================================================================


@pytest.mark.unit
def test_save_as_uses_extension_as_format(monkeypatch):
    class Ledger(Hooks):
        pass

    calls = []
    monkeypatch.setattr(
        Ledger, "render_as", lambda self, format_id, options=None: calls.append((format_id, options))
    )

    Ledger().save_as("report.csv", {})

    assert calls == [("csv", {"file": "report.csv"})]


@pytest.mark.unit
def test_save_as_keeps_given_options(monkeypatch):
    class Ledger(Hooks):
        pass

    calls = []
    monkeypatch.setattr(
        Ledger, "render_as", lambda self, format_id, options=None: calls.append((format_id, options))
    )

    Ledger().save_as("out/summary.text", {"label": "x"}, width=3)

    assert calls == [("text", {"label": "x", "width": 3, "file": "out/summary.text"})]


@pytest.mark.unit
def test_save_as_without_extension_raises():
    class Ledger(Hooks):
        pass

    Ledger.renders_with(EchoController)

    with pytest.raises(FormatNotDetectedError) as exc_info:
        Ledger().save_as("README")

    assert isinstance(exc_info.value, UnknownFormatError)
    assert exc_info.value.path == "README"


@pytest.mark.unit
def test_save_as_writes_file(tmp_path):
    class Ledger(list, Hooks):
        pass

    Ledger.renders_with(EchoController)
    target = tmp_path / "ledger.echo"

    result = Ledger([1]).save_as(target, label="saved")

    assert result == "[1]|saved"
    assert target.read_text() == "[1]|saved"


@pytest.mark.unit
def test_binding_is_not_inherited():
    class Ledger(list, Hooks):
        pass

    class SubLedger(Ledger):
        pass

    Ledger.renders_with(EchoController, label="parent")

    assert SubLedger.controller() is None
    assert SubLedger.rendering_options() == {}
    with pytest.raises(ControllerNotSetError):
        SubLedger().render_as("echo")

    SubLedger.renders_with(EchoController)
    assert SubLedger().render_as("echo") == "[]|None"
