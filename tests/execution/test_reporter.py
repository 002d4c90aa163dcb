"""Tests for console reporting."""

from turning.execution import Reporter, indent


class TestIndent:
    def test_indents_every_line(self):
        assert indent("a\nb", 2) == "    a\n    b"

    def test_keeps_empty_lines_empty(self):
        assert indent("a\n\nb", 1) == "  a\n\n  b"


class TestReporter:
    def test_case_and_steps(self, capsys):
        reporter = Reporter()

        reporter.case("1.2", 1)
        reporter.step("Turn [a] to [b]", ("b",), 2)

        out = capsys.readouterr().out
        assert out == "  Test Case 1.2\n    Turn [a] to [b]\n"

    def test_verbose_prints_current_states(self, capsys):
        Reporter(verbose=True).step("Initialize [a,b]", ("a", "b"), 0)

        assert "Current states [a,b]" in capsys.readouterr().out

    def test_failure_goes_to_stderr_with_traceback(self, capsys):
        try:
            raise ValueError("broken handler")
        except ValueError as e:
            Reporter().failure("Transition failed", e, 1)

        captured = capsys.readouterr()
        assert captured.out == ""
        assert " Transition failed " in captured.err
        assert "ValueError: broken handler" in captured.err
        assert "Traceback" in captured.err

    def test_summary(self, capsys):
        Reporter().summary(["1", "2.1"])

        err = capsys.readouterr().err
        assert "Failed test cases" in err
        assert "  1\n  2.1" in err

    def test_no_summary_when_all_passed(self, capsys):
        Reporter().summary([])

        assert capsys.readouterr().err == ""
