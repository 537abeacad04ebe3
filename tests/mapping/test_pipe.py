"""
Tests for transform pipelines.
"""

from graph_mapper.mapping.paths import MISSING
from graph_mapper.mapping.pipe import Step, TransformPipeline, pass_thru, pipe


def join(a, b):
    return a + " " + b


def capitalize(value):
    return value.upper()


def emphasize(value):
    return value + "!!!"


class TestPipe:
    """Test plain function composition."""

    def test_first_function_receives_all_arguments(self):
        piped = pipe([join, capitalize, emphasize])
        assert piped("example", "input") == "EXAMPLE INPUT!!!"

    def test_empty_pipe_is_identity(self):
        assert pipe([])("value") == "value"

    def test_pass_thru(self):
        assert pass_thru("a", "b") == "a"
        assert pass_thru() is MISSING
        assert pass_thru(None) is None


class TestTransformPipeline:
    """Test read/write pipelines built from configuration specs."""

    def test_defaults_to_identity(self):
        pipeline = TransformPipeline()
        assert pipeline.read("value") == "value"
        assert pipeline.write("value") == "value"
        assert pipeline.read(MISSING) is MISSING

    def test_single_callables(self):
        pipeline = TransformPipeline(read=capitalize, write=str.lower)
        assert pipeline.read("abc") == "ABC"
        assert pipeline.write("ABC") == "abc"

    def test_lists_run_in_configured_order(self):
        pipeline = TransformPipeline(
            read=[join, capitalize, emphasize],
            write=[lambda v: v.rstrip("!"), str.lower, str.split],
        )
        assert pipeline.read("example", "input") == "EXAMPLE INPUT!!!"
        assert pipeline.write("EXAMPLE INPUT!!!") == ["example", "input"]

    def test_from_steps_inverts_write_order(self):
        calls = []

        def step(name):
            def read(value):
                calls.append(f"read {name}")
                return value

            def write(value):
                calls.append(f"write {name}")
                return value

            return Step(read, write)

        pipeline = TransformPipeline.from_steps([step("f1"), step("f2"), step("f3")])
        pipeline.read("x")
        pipeline.write("x")

        assert calls == [
            "read f1",
            "read f2",
            "read f3",
            "write f3",
            "write f2",
            "write f1",
        ]

    def test_from_steps_round_trip(self):
        pipeline = TransformPipeline.from_steps(
            [
                Step(read=lambda cents: cents / 100, write=lambda amount: amount * 100),
                Step(read=lambda amount: f"{amount:.2f}", write=float),
            ],
        )
        assert pipeline.read(1250) == "12.50"
        assert pipeline.write("12.50") == 1250.0

    def test_from_steps_skips_read_only_steps_on_write(self):
        pipeline = TransformPipeline.from_steps([Step(read=str.strip), Step(read=str.upper)])
        assert pipeline.read("  abc ") == "ABC"
        assert pipeline.write("ABC") == "ABC"
