import contextlib
import dataclasses
import io
import sys
from datetime import date, datetime

import pytest

from rangereport import config
from rangereport.core.models import Task

NOW = datetime(2026, 2, 22, 15, 0)
TODAY = NOW.date()


def ms(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


def make_task(
    id: str = "t1",
    title: str = "Task",
    is_done: bool = False,
    due_day: date | None = None,
    done_on: datetime | None = None,
    planned_at: datetime | None = None,
    spent: dict[date, int] | None = None,
    parent_id: str | None = None,
    project_id: str | None = None,
) -> Task:
    return Task(
        id=id,
        title=title,
        is_done=is_done,
        parent_id=parent_id,
        project_id=project_id,
        done_on=done_on,
        due_day=due_day,
        planned_at=planned_at,
        time_spent_on_day=spent or {},
    )


@pytest.fixture
def tmp_report_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "REPORT_DIR", tmp_path)
    monkeypatch.setattr(config, "CONFIG_PATH", tmp_path / "config.yaml")
    config._config.reload()
    yield tmp_path
    config._config.reload()


@dataclasses.dataclass
class Result:
    exit_code: int
    stdout: str
    stderr: str


class FnCLIRunner:
    def invoke(self, args: list[str]) -> Result:
        from rangereport import cli

        out, err = io.StringIO(), io.StringIO()
        argv = sys.argv
        sys.argv = ["rangereport", *args]
        code = 0
        try:
            with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
                cli.main()
        except SystemExit as e:
            if isinstance(e.code, int):
                code = e.code
            elif e.code is None:
                code = 0
            else:
                err.write(str(e.code))
                code = 1
        except Exception as e:
            err.write(str(e))
            code = 1
        finally:
            sys.argv = argv
        return Result(exit_code=code, stdout=out.getvalue(), stderr=err.getvalue())


@pytest.fixture
def runner(tmp_report_dir):
    return FnCLIRunner()
