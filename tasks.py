from pathlib import Path

from invoke import task
from invoke.exceptions import Exit

REPO_ROOT = Path(__file__).resolve().parent
DEMO_DB = "duckdb:///demo.duckdb"


@task
def lint(c):
    c.run("ruff check .")


@task
def format_check(c):
    c.run("ruff format --check .")


@task
def test(c):
    c.run("pytest")


@task
def demo(c, database=DEMO_DB):
    fixture = REPO_ROOT / "fixtures" / "demo.yaml"
    if not fixture.exists():
        raise Exit(f"Missing demo fixture: {fixture}")
    c.run(f"artswap seed {fixture} --database {database}")
    c.run(f"artswap close spring-swap --database {database}")
    c.run(f"artswap show spring-swap --database {database}")


@task
def ci(c):
    lint(c)
    format_check(c)
    test(c)
