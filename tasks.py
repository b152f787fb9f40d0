"""Invoke tasks for developing sdom."""

from invoke import task

RESULTS = "results"


@task(help={"match": "Only run tests whose name matches this pytest -k expression"})
def tests(c, match=None):
    """Run the unit tests."""
    selection = f' -k "{match}"' if match else ""
    c.run(f"pytest tests/unit{selection}", pty=True)


@task
def coverage(c):
    """Measure branch coverage of the sdom package and write HTML/XML reports."""
    c.run(f"mkdir -p {RESULTS}")
    c.run("coverage erase")
    c.run(f"coverage run -m pytest tests/unit --junitxml={RESULTS}/pytest.xml")
    c.run("coverage report --show-missing")
    c.run(f"coverage html -d {RESULTS}/htmlcov")
    c.run(f"coverage xml -o {RESULTS}/coverage.xml")


@task(help={"fix": "Reformat files instead of only checking them"})
def lint(c, fix=False):
    """Check formatting with black and types with mypy."""
    c.run(f"black {'' if fix else '--check '}src tests tasks.py")
    c.run("mypy src/sdom")


@task(
    help={
        "page": "HTML file to render, or - for stdin",
        "url": "Address the page is served from",
        "report_url": "Endpoint the bootstrap script reports events to",
        "execute": "Run server-context Python scripts",
    }
)
def render(c, page, url="about:blank", report_url=None, execute=True):
    """Render a page through sdom-render and print the rehydrated markup."""
    args = [page, "--url", url]
    if report_url:
        args += ["--report-url", report_url]
    if not execute:
        args.append("--no-execute")
    c.run("sdom-render " + " ".join(args), pty=True)
