import pytest

from cukeslicer.assembly.outline_expander import MatchMode, OutlineExpander, ParameterBinding, build_bindings
from cukeslicer.assembly.step_extractor import StepExtractor
from cukeslicer.data_classes.dataclass_report import AssemblyContext
from tests.helpers.report_helpers import build_feature, build_outline, parse_features, step


def outline_element(rows, name="Buy <fruit>", steps=None):
    steps = steps or [step("When ", "I buy <count> <fruit>")]
    return parse_features(build_feature(build_outline(name, steps, rows))).features[0].elements[0]


class TestParameterBinding:
    @pytest.mark.outline
    def test_bindings_zip_header_with_rows(self):
        element = outline_element([["fruit", "count"], ["apple", "2"], ["pear", "5"]])

        bindings = build_bindings(element)

        assert [binding.index for binding in bindings] == [0, 1]
        assert bindings[0].pairs == [("fruit", "apple"), ("count", "2")]
        assert bindings[1].pairs == [("fruit", "pear"), ("count", "5")]

    @pytest.mark.outline
    def test_every_placeholder_occurrence_is_replaced(self):
        binding = ParameterBinding(0, [("fruit", "apple")])

        assert binding.substitute("<fruit> and <fruit>") == "apple and apple"

    @pytest.mark.outline
    def test_unmatched_placeholder_stays_literal(self, log_entries):
        binding = ParameterBinding(0, [("fruit", "apple")])

        assert binding.substitute("I buy <count> <fruit>") == "I buy <count> apple"
        assert any(entry["placeholder"] == "<count>" for entry in log_entries("DEBUG"))

    @pytest.mark.outline
    def test_first_matching_column_wins(self):
        binding = ParameterBinding(0, [("fruit", "apple"), ("fruit", "pear")])

        assert binding.substitute("<fruit>") == "apple"

    @pytest.mark.outline
    def test_raw_mode_needs_the_name_as_written(self):
        binding = ParameterBinding(0, [("search term", "blue cheese")])

        assert binding.substitute("I type <search term>") == "I type blue cheese"
        assert binding.substitute("I type <search-term>") == "I type <search-term>"

    @pytest.mark.outline
    def test_slug_mode_matches_hyphenated_names(self):
        binding = ParameterBinding(0, [("search term", "blue cheese")])

        assert binding.substitute("look-up-<search-term>", MatchMode.SLUG) == "look-up-blue cheese"
        assert binding.substitute("look-up-<Search-Term>", MatchMode.SLUG) == "look-up-blue cheese"

    @pytest.mark.outline
    def test_mismatched_row_is_rejected(self):
        element = outline_element([["fruit", "count"], ["apple"]])

        with pytest.raises(ValueError):
            build_bindings(element)

    @pytest.mark.outline
    def test_several_examples_sections(self):
        data = build_outline("Buy <fruit>", [step("When ", "I buy <fruit>")], [["fruit"], ["apple"]])
        data["examples"].append({"rows": [{"cells": ["fruit"]}, {"cells": ["pear"]}, {"cells": ["plum"]}]})
        element = parse_features(build_feature(data)).features[0].elements[0]

        bindings = build_bindings(element)

        assert [binding.pairs for binding in bindings] == [[("fruit", "apple")], [("fruit", "pear")], [("fruit", "plum")]]
        assert [binding.index for binding in bindings] == [0, 1, 2]


class TestOutlineExpander:
    @pytest.mark.outline
    def test_rows_are_drained_in_order(self):
        expander = OutlineExpander(outline_element([["fruit", "count"], ["apple", "1"], ["pear", "2"], ["plum", "3"]]))
        assert expander.remaining == 3

        seen = []
        for binding in expander.drain():
            seen.append(binding.substitute("<fruit>"))
            # the current row is only removed once the next one is requested
            assert expander.remaining == 3 - len(seen) + 1

        assert seen == ["apple", "pear", "plum"]
        assert expander.exhausted
        assert expander.consumed == 3

    @pytest.mark.outline
    def test_drained_queue_yields_nothing_more(self):
        expander = OutlineExpander(outline_element([["fruit", "count"], ["apple", "1"]]))
        assert len(list(expander.drain())) == 1
        assert list(expander.drain()) == []

    @pytest.mark.outline
    def test_apply_substitutes_scenario_fragments(self):
        element = outline_element(
            [["fruit", "count"], ["apple", "2"]],
            steps=[step("Given ", "a basket:", rows=[["<fruit>", "<count>"]]), step("When ", "I buy <count> <fruit>")],
        )
        context = AssemblyContext(background=["Background:", "Given a shop selling <fruit>"])
        StepExtractor().extract(element, context)
        binding = build_bindings(element)[0]

        OutlineExpander.apply(binding, context)

        assert context.steps == ["Scenario: Buy apple", "Given a basket:", "| apple | 2 |", "When I buy 2 apple"]
        assert context.heading == "Scenario: Buy apple"
        assert context.background == ["Background:", "Given a shop selling <fruit>"]

    @pytest.mark.outline
    def test_filename_uses_slug_mode(self):
        binding = ParameterBinding(0, [("search term", "blue cheese")])

        assert OutlineExpander.filename(binding, "look-up-<search-term>-1.feature") == "look-up-blue cheese-1.feature"
