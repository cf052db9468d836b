import pytest

from octdevkit.systemchooser import SystemChooser


def test_default_confirms_first_entry():
    chooser = SystemChooser()
    assert chooser.select_system(["Alpha", "Beta"]) == "Alpha"
    assert chooser.items == []


def test_empty_list_returns_empty_string():
    chooser = SystemChooser()
    assert chooser.select_system([]) == ""


def test_select_then_ok():
    def interact(chooser):
        chooser.select(1)
        chooser.on_ok_clicked()

    chooser = SystemChooser(interact)
    assert chooser.select_system(["Alpha", "Beta", "Gamma"]) == "Beta"


def test_double_click_picks_item():
    chooser = SystemChooser(lambda c: c.on_double_clicked(c.items[2]))
    assert chooser.select_system(["Alpha", "Beta", "Gamma"]) == "Gamma"
    assert chooser.is_open is False


def test_closing_without_choice_keeps_previous_selection():
    chooser = SystemChooser()
    chooser.select_system(["Alpha"])
    chooser._interact = lambda c: None
    assert chooser.select_system(["Beta"]) == "Alpha"


def test_chooser_is_open_during_interaction():
    seen = []

    def interact(chooser):
        seen.append((chooser.is_open, list(chooser.items), chooser.selected_index))
        chooser.on_ok_clicked()

    chooser = SystemChooser(interact)
    assert chooser.select_system(["Alpha", "Beta"]) == "Alpha"
    assert seen == [(True, ["Alpha", "Beta"], 0)]
    assert chooser.is_open is False


def test_select_out_of_range_raises():
    errors = []

    def interact(chooser):
        with pytest.raises(IndexError):
            chooser.select(5)
        errors.append(True)
        chooser.on_ok_clicked()

    assert SystemChooser(interact).select_system(["Alpha"]) == "Alpha"
    assert errors == [True]