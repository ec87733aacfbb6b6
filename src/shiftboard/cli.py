import asyncio
import sys
import typer
from shiftboard.config import settings
from shiftboard.logging import logger, get_run_id

app = typer.Typer(no_args_is_help=True)

@app.callback()
def main():
    """
    Shiftboard CLI.
    """
    pass

@app.command(name="doctor")
def doctor():
    """
    Check configuration and environment health.
    """
    logger.info("Running doctor check...")

    failures: list[str] = []
    passed = 0

    print("\n🩺 Shiftboard Doctor\n")

    # ── Check 1: Environment / Interpreter ──────────────────────────────────
    print("[Environment]")
    print(f"  Python: {sys.version.split()[0]}")
    print(f"  Prefix: {sys.prefix}")
    print(f"  Run ID: {get_run_id()}")
    passed += 1

    # ── Check 2: Backend credentials ────────────────────────────────────────
    print("\n[Backend]")
    print(f"  SUPABASE_URL:                {settings.SUPABASE_URL}")
    for name in ("SUPABASE_ANON_KEY", "SUPABASE_SERVICE_ROLE_KEY"):
        if getattr(settings, name).get_secret_value():
            print(f"  {name + ':':<29}✅ Set")
            passed += 1
        else:
            print(f"  {name + ':':<29}❌ Missing")
            failures.append(f"{name} is not set; add it to .env")

    # ── Check 3: Dashboard feed settings ────────────────────────────────────
    print("\n[Dashboard]")
    print(f"  DASHBOARD_RPC:               {settings.DASHBOARD_RPC}")
    print(f"  DASHBOARD_PAGE_SIZE:         {settings.DASHBOARD_PAGE_SIZE}")
    print(f"  REFRESH_INTERVAL_SECONDS:    {settings.REFRESH_INTERVAL_SECONDS}")
    print(f"  FULL_TIME_HOURS:             {settings.FULL_TIME_HOURS}")
    print(f"  HEAD_OFFICE_BASES:           {settings.HEAD_OFFICE_BASES}")
    print(f"  DISPLAY_TIMEZONE:            {settings.DISPLAY_TIMEZONE}")
    if settings.DASHBOARD_PAGE_SIZE > 0 and settings.REFRESH_INTERVAL_SECONDS > 0:
        passed += 1
    else:
        failures.append("DASHBOARD_PAGE_SIZE and REFRESH_INTERVAL_SECONDS must be positive")

    # ── Check 4: Signup tables ──────────────────────────────────────────────
    print("\n[Signup]")
    print(f"  ADMIN_EMPLOYEE_IDS:          {len(settings.ADMIN_EMPLOYEE_IDS)} configured")
    print(f"  SIGNUP_ALLOWED_TITLE_TERMS:  {settings.SIGNUP_ALLOWED_TITLE_TERMS}")
    if settings.SITE_URL:
        print(f"  SITE_URL:                    ✅ {settings.SITE_URL}")
        passed += 1
    else:
        print("  SITE_URL:                    ⚠️  Not set (confirmation emails get no redirect)")

    # ── Summary ──────────────────────────────────────────────────────────────
    total = passed + len(failures)
    print(f"\n{'─' * 50}")
    if failures:
        print(f"Result: {passed}/{total} checks passed\n")
        for msg in failures:
            print(f"  ❌ {msg}")
        print()
        raise typer.Exit(code=1)
    else:
        print(f"Result: {passed}/{total} checks passed, all good ✅")
        print()


@app.command(name="classify")
def classify(job_title: str, base: str = typer.Argument("")):
    """Show the function group for a job title at a base."""
    from shiftboard.dashboard.classifier import classify as classify_title

    group = classify_title(
        job_title, base, head_office_bases={b.upper() for b in settings.HEAD_OFFICE_BASES},
    )
    print(group.value)


@app.command(name="snapshot")
def snapshot(
    email: str = typer.Option(..., prompt=True),
    password: str = typer.Option(..., prompt=True, hide_input=True),
    limit: int = typer.Option(20, help="Rows to print"),
):
    """Sign in, fetch the dashboard once and print counters and top rows."""
    from shiftboard.api.schemas.auth import LoginRequest
    from shiftboard.dashboard.formatting import hours_to_hhmm
    from shiftboard.dashboard.models import ViewPhase
    from shiftboard.dashboard.view_model import DashboardOptions
    from shiftboard.domain.exceptions import ShiftboardError
    from shiftboard.infra.backend.client import BackendClient
    from shiftboard.services.auth_service import AuthService, Identity
    from shiftboard.services.dashboard_service import DashboardSessions

    async def _run():
        client = BackendClient.from_settings(settings)
        options = DashboardOptions.from_settings(settings)
        sessions = DashboardSessions(client, options, settings.DASHBOARD_RPC)
        try:
            auth = AuthService(client)
            session = await auth.sign_in(LoginRequest(email=email, password=password))
            identity = Identity(access_token=session.access_token, user_id=session.user_id)
            vm = await sessions.open(identity)
            return vm.snapshot()
        finally:
            await sessions.close_all()
            await client.aclose()

    try:
        snap = asyncio.run(_run())
    except ShiftboardError as e:
        logger.error(f"Snapshot failed: {e.message}")
        print(f"❌ Failed: {e.message}")
        raise typer.Exit(code=1)

    if snap.phase == ViewPhase.FETCH_ERROR:
        print(f"❌ Fetch failed: {snap.error}")
        raise typer.Exit(code=1)

    counts = snap.counts
    print(f"Registros: {counts.total}   Hora extra total: {hours_to_hhmm(counts.overtime_total)}")
    print(f"HE ativa: {counts.overtime_active}   Em jornada: {counts.on_shift}   Finalizados: {counts.finished}")
    for i, row in enumerate(snap.rows[:limit], 1):
        print(f"{i:>3}. {row.employee_id or '-':<10} {row.name or '-':<30} {row.base or '-':<6} "
              f"{row.function_group.value:<10} {row.status_label}")

if __name__ == "__main__":
    app()
