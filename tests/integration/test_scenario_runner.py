"""
Integration tests for the scenario runner and demo data.
"""

import io

import pytest
from rich.console import Console

from core.audit import MemoryAccessLogger
from core.policy import AccessPolicy
from models.entities import Laboratory, Lecturer, Staff, Student
from scenarios import build_demo_cast, run_scenarios
from scenarios.demo_data import make_facility, make_person


def quiet_console() -> Console:
    return Console(file=io.StringIO(), width=120)


class TestRunScenarios:
    """Reference scenarios."""

    def test_all_pass_with_default_policy(self) -> None:
        assert run_scenarios(output=quiet_console()) == (6, 0)

    def test_extra_logger_receives_trail(self) -> None:
        logger = MemoryAccessLogger()
        run_scenarios(logger=logger, output=quiet_console())
        assert len(logger.messages) == 8
        assert logger.messages[2].startswith("Access granted to Student Aruana")

    def test_failures_reported(self) -> None:
        class EveryoneIn(AccessPolicy):
            def can_access(self, person, facility) -> bool:
                return True

        output = quiet_console()
        passed, failed = run_scenarios(policy=EveryoneIn(), output=output)
        assert (passed, failed) == (4, 2)
        assert "FAIL" in output.file.getvalue()


class TestDemoData:
    """Reference cast and lookups."""

    def test_cast(self) -> None:
        cast = build_demo_cast()
        assert isinstance(cast.student, Student)
        assert isinstance(cast.lecturer, Lecturer)
        assert isinstance(cast.staff, Staff)
        assert isinstance(cast.lab, Laboratory)
        assert cast.lab.name == "AI Lab"

    def test_fresh_ids_each_build(self) -> None:
        assert build_demo_cast().student.id != build_demo_cast().student.id

    @pytest.mark.parametrize("name,cls", [("student", Student), ("LECTURER", Lecturer), ("Staff", Staff)])
    def test_make_person(self, name: str, cls) -> None:
        assert isinstance(make_person(name), cls)

    def test_make_facility(self) -> None:
        assert make_facility("laboratory").name == "AI Lab"

    def test_unknown_names(self) -> None:
        with pytest.raises(ValueError):
            make_person("visitor")
        with pytest.raises(ValueError):
            make_facility("garage")
