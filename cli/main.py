"""
Campus Access Control - Interactive CLI
=======================================

Command-line interface for exploring access decisions:

- The reference demo walkthrough
- One-off access checks for any person/facility pairing
- The access level matrix
- Scenario runs with PASS/FAIL reporting
- Inspection of the recorded audit trail

Built with Typer and Rich.
"""

import typer
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

# Initialize CLI app and console
app = typer.Typer(
    name="campus-access",
    help="Campus Access Control - policy plus explicit grants",
    add_completion=False
)

console = Console()

# Sub-commands
audit_app = typer.Typer(help="View the recorded audit trail")

app.add_typer(audit_app, name="audit")


def get_session():
    """Get a database session, creating the audit tables if needed."""
    from models.database import get_session, init_db
    init_db()
    return get_session()


def print_banner():
    """Display application banner."""
    banner = """
    ╔═══════════════════════════════════════════════════════════╗
    ║              CAMPUS ACCESS CONTROL SYSTEM                 ║
    ║                                                           ║
    ║    Access levels vs. facility requirements, plus grants   ║
    ╚═══════════════════════════════════════════════════════════╝
    """
    console.print(Panel(banner, style="bold blue"))


def decision_style(result: bool) -> str:
    return "[green]PERMIT[/green]" if result else "[red]DENY[/red]"


# ============================================================================
# Database Commands
# ============================================================================

@app.command()
def init():
    """Create the audit trail tables."""
    from models.database import init_db
    init_db()
    console.print("[green]Audit database initialized successfully![/green]")


@app.command()
def reset():
    """Reset the audit trail (WARNING: destroys all recorded events)."""
    if typer.confirm("This will delete the recorded audit trail. Are you sure?"):
        from models.database import reset_db
        reset_db()
        console.print("[yellow]Audit database reset complete.[/yellow]")


# ============================================================================
# Access Commands
# ============================================================================

@app.command()
def demo(
    record: bool = typer.Option(False, "--record", help="Also store the audit trail in the database")
):
    """Run the reference walkthrough: requests, a grant and a revoke."""
    from core.access_manager import AccessManager
    from core.audit import CompositeAccessLogger, ConsoleAccessLogger, SqlAuditLogger
    from core.policy import DefaultAccessPolicy
    from scenarios.demo_data import build_demo_cast, run_demo_sequence

    cast = build_demo_cast()

    if record:
        with get_session() as session:
            logger = CompositeAccessLogger(ConsoleAccessLogger(), SqlAuditLogger(session))
            run_demo_sequence(AccessManager(DefaultAccessPolicy(), logger), cast)
        console.print("\n[green]Audit trail recorded.[/green] Try [cyan]python main.py audit logs[/cyan]")
    else:
        run_demo_sequence(AccessManager(DefaultAccessPolicy(), ConsoleAccessLogger()), cast)


@app.command()
def check(
    person: str = typer.Option(..., "--person", "-p", help="Person: student, lecturer, staff"),
    facility: str = typer.Option(..., "--facility", "-f", help="Facility: building, room, laboratory"),
    grant: bool = typer.Option(False, "--grant", "-g", help="Grant explicit access before asking")
):
    """Test a single access decision."""
    from core.access_manager import AccessManager
    from core.audit import ConsoleAccessLogger
    from core.policy import DefaultAccessPolicy
    from scenarios.demo_data import make_facility, make_person

    try:
        who = make_person(person)
        where = make_facility(facility)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    policy = DefaultAccessPolicy()
    manager = AccessManager(policy, ConsoleAccessLogger())

    if grant:
        manager.grant_access(who, where)
    result = manager.request_access(who, where)

    headline = "[bold green]ACCESS GRANTED[/bold green]" if result else "[bold red]ACCESS DENIED[/bold red]"
    if result and not policy.can_access(who, where):
        reason = "explicit grant"
    elif result:
        reason = "access level meets requirement"
    else:
        reason = "access level below requirement, no grant"

    console.print(Panel(
        f"{headline}\n\n"
        f"Person: {who.describe()}\n"
        f"Access Level: {who.get_access_level().name}\n"
        f"{where.info()}\n"
        f"Required Level: {where.required_level().name}\n\n"
        f"Reason: {reason}",
        title="Access Decision",
        box=box.DOUBLE
    ))


@app.command()
def levels():
    """Show access levels, facility requirements and the policy matrix."""
    from core.policy import DefaultAccessPolicy
    from models.entities import FacilityKind
    from scenarios.demo_data import build_demo_cast

    cast = build_demo_cast()
    people = [cast.student, cast.lecturer, cast.staff]
    facilities = [cast.building, cast.room, cast.lab]
    policy = DefaultAccessPolicy()

    people_table = Table(title="People", box=box.ROUNDED)
    people_table.add_column("Role", style="cyan")
    people_table.add_column("Access Level", style="yellow")
    people_table.add_column("Example")
    for p in people:
        people_table.add_row(p.role.name, p.get_access_level().name, p.describe())
    console.print(people_table)

    facility_table = Table(title="Facilities", box=box.ROUNDED)
    facility_table.add_column("Kind", style="cyan")
    facility_table.add_column("Required Level", style="yellow")
    for kind in FacilityKind:
        facility_table.add_row(kind.name, kind.required_level.name)
    console.print(facility_table)

    matrix = Table(title="Policy Matrix (no grants)", box=box.ROUNDED)
    matrix.add_column("Person", style="cyan")
    for f in facilities:
        matrix.add_column(f.kind.name, justify="center")
    for p in people:
        matrix.add_row(p.role.name, *[decision_style(policy.can_access(p, f)) for f in facilities])
    console.print(matrix)


@app.command()
def scenario():
    """Run the reference scenarios and report PASS/FAIL."""
    from scenarios import run_scenarios
    _, failed = run_scenarios()
    if failed:
        raise typer.Exit(code=1)


# ============================================================================
# Audit Commands
# ============================================================================

@audit_app.command("logs")
def view_logs(
    limit: int = typer.Option(20, "--limit", "-l", help="Number of events to show"),
    action: str = typer.Option(None, "--action", "-a", help="Filter by action (GRANT/REVOKE/REQUEST)"),
    decision: str = typer.Option(None, "--decision", "-d", help="Filter by decision (PERMIT/DENY)")
):
    """View recorded audit events."""
    from core.audit import SqlAuditLogger
    from models.entities import AuditAction

    audit_action = None
    if action:
        try:
            audit_action = AuditAction[action.upper()]
        except KeyError:
            console.print(f"[red]Unknown action '{action}'[/red]")
            raise typer.Exit(code=1)

    result = None
    if decision:
        if decision.upper() not in ("PERMIT", "DENY"):
            console.print(f"[red]Unknown decision '{decision}'[/red]")
            raise typer.Exit(code=1)
        result = decision.upper() == "PERMIT"

    with get_session() as session:
        logger = SqlAuditLogger(session)
        events = logger.get_events(action=audit_action, result=result, limit=limit)

        table = Table(title="Audit Trail", box=box.ROUNDED)
        table.add_column("Time", style="dim")
        table.add_column("Action", style="magenta")
        table.add_column("Person", style="cyan")
        table.add_column("Facility")
        table.add_column("Decision")

        for event in events:
            table.add_row(
                event.timestamp.strftime("%H:%M:%S") if event.timestamp else "-",
                event.action.value if event.action else "-",
                event.person_description or "-",
                event.facility_name or "-",
                decision_style(event.result) if event.result is not None else "-"
            )

        console.print(table)


@audit_app.command("stats")
def audit_stats(hours: int = typer.Option(24, help="Analysis period in hours")):
    """Show access decision statistics."""
    from core.audit import SqlAuditLogger

    with get_session() as session:
        stats = SqlAuditLogger(session).get_statistics(hours=hours)

        console.print(Panel(
            f"""
[bold]Period:[/bold] Last {stats['period_hours']} hours

[bold]Total Events:[/bold] {stats['total_events']}
[bold]Grants:[/bold] {stats['grants']}
[bold]Revokes:[/bold] {stats['revokes']}

[bold]Requests:[/bold] {stats['total_requests']}
[bold]Permits:[/bold] [green]{stats['permits']}[/green] ({stats['permit_rate']:.1%})
[bold]Denials:[/bold] [red]{stats['denials']}[/red] ({stats['denial_rate']:.1%})

[bold]Unique People:[/bold] {stats['unique_persons']}
[bold]Unique Facilities:[/bold] {stats['unique_facilities']}
""",
            title="Access Statistics",
            box=box.ROUNDED
        ))


@audit_app.command("denials")
def recent_denials(hours: int = typer.Option(24, help="Look back period")):
    """Show recent denied requests."""
    from core.audit import SqlAuditLogger

    with get_session() as session:
        denials = SqlAuditLogger(session).get_recent_denials(hours=hours)

        if not denials:
            console.print("[green]No access denials in the specified period.[/green]")
            return

        table = Table(title=f"Access Denials (Last {hours}h)", box=box.ROUNDED)
        table.add_column("Time", style="dim")
        table.add_column("Person", style="cyan")
        table.add_column("Facility")

        for event in denials:
            table.add_row(
                event.timestamp.strftime("%Y-%m-%d %H:%M:%S") if event.timestamp else "-",
                event.person_description or "-",
                event.facility_name or "-"
            )

        console.print(table)


@audit_app.command("export")
def export_logs(
    output: str = typer.Option("audit_export.json", "--output", "-o", help="Output file"),
    format: str = typer.Option("json", "--format", "-f", help="Format: json or csv")
):
    """Export the audit trail."""
    from core.audit import SqlAuditLogger

    with get_session() as session:
        try:
            data = SqlAuditLogger(session).export_events(format=format)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(code=1)

    with open(output, 'w') as f:
        f.write(data)

    console.print(f"[green]Exported audit trail to {output}[/green]")


# ============================================================================
# Main Entry Point
# ============================================================================

@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """
    Campus Access Control

    Students, lecturers and staff request access to buildings, rooms and
    laboratories. A policy compares access levels; explicit grants add
    exceptions on top.
    """
    if ctx.invoked_subcommand is None:
        print_banner()
        console.print("\nUse [cyan]--help[/cyan] to see available commands.\n")
        console.print("Quick Start:")
        console.print("  1. [cyan]python main.py demo[/cyan]       - Reference walkthrough")
        console.print("  2. [cyan]python main.py levels[/cyan]     - Access level matrix")
        console.print("  3. [cyan]python main.py check --person student --facility laboratory[/cyan]")
        console.print("  4. [cyan]python main.py scenario[/cyan]   - Scenario PASS/FAIL report")
        console.print()


if __name__ == "__main__":
    app()
