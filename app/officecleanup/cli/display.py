"""Rich rendering of section reports, summaries and operator notices.

Every function writes to the shared consoles from
``officecleanup.utils.formatting``; none of them inspects the system.
"""

from officecleanup.engine.reporter import RunSummary
from officecleanup.engine.state import ItemReport, RemovalOutcome, RunMode, SectionReport
from officecleanup.utils.formatting import (
    console,
    create_items_table,
    print_header,
    print_info,
    print_success,
    print_warning,
)

FULL_DISK_ACCESS_URL = "x-apple.systempreferences:com.apple.preference.security?Privacy_AllFiles"

LOGIN_ITEMS = ("Microsoft AutoUpdate", "Microsoft Teams", "OneDrive")

_MARKERS: dict[RemovalOutcome, str] = {
    RemovalOutcome.REMOVED: "[removed]✓[/]",
    RemovalOutcome.PROTECTED_SANDBOX: "[protected]![/]",
    RemovalOutcome.FAILED: "[error]✗[/]",
    RemovalOutcome.NOT_FOUND: "[missing]○[/]",
}


def _marker(item: ItemReport) -> str:
    if item.outcome is None:
        return "[found]●[/]"
    return _MARKERS[item.outcome]


def _location(item: ItemReport) -> str:
    location = item.match or ""
    if item.detail:
        style = "error" if item.outcome == RemovalOutcome.FAILED else "muted"
        location = f"{location} [{style}]({item.detail})[/]"
    return location


def print_section(report: SectionReport) -> None:
    """Render one completed catalog section.

    Sections without findings collapse to a single muted line.

    Args:
        report: Section report emitted by the controller.
    """
    if not report.items:
        console.print(f"[missing]○[/] [muted]{report.title}: nothing found[/]")
        return

    table = create_items_table(report.title)
    for item in report.items:
        table.add_row(_marker(item), item.label, _location(item))
    console.print()
    console.print(table)


def print_run_banner(mode: RunMode) -> None:
    """Print the opening header for ``mode``."""
    if mode == RunMode.AUDIT:
        print_header("Microsoft Office Cleanup Audit")
        console.print("Scanning your system for Microsoft Office components...")
        console.print("[muted]No files will be modified or deleted.[/]\n")
    else:
        print_header("Microsoft Office Complete Removal")


def print_removal_warning() -> None:
    """Describe what a removal pass destroys."""
    console.print("[bold]This will permanently remove ALL Microsoft Office components:[/]")
    for component in (
        "Microsoft Office apps (Word, Excel, PowerPoint, Outlook, OneNote)",
        "Microsoft Teams",
        "Microsoft OneDrive",
        "Microsoft AutoUpdate",
        "All preferences, caches and support files",
    ):
        console.print(f"  • {component}")
    console.print()
    print_warning("All Outlook data (emails, calendar) will be permanently removed")
    print_warning("OneDrive sync data will be removed (cloud files remain on OneDrive.com)")
    print_warning("Teams data will be removed")
    print_warning("This action cannot be undone!")
    console.print()


def print_login_items_notice() -> None:
    """Login Items cannot be edited from the command line."""
    console.print()
    print_info("Login Items should be checked manually.")
    print_info("Go to: System Settings → General → Login Items")
    for name in LOGIN_ITEMS:
        console.print(f"  - {name}")


def print_full_disk_access_instructions() -> None:
    """Explain how to grant Terminal Full Disk Access."""
    console.print("[warning]macOS protects app containers with its sandbox system.[/]")
    console.print("[warning]To fully remove Microsoft containers, Terminal needs Full Disk Access.[/]\n")
    console.print("[bold]To enable Full Disk Access for Terminal:[/]")
    steps = [
        "Open [info]System Settings[/] (System Preferences on older macOS)",
        "Go to [info]Privacy & Security[/] → [info]Full Disk Access[/]",
        "Click the [info]+[/] button (you may need to unlock with your password)",
        "Navigate to [info]/Applications/Utilities/[/]",
        "Select [info]Terminal[/] and click [info]Open[/]",
        "Toggle Terminal [info]ON[/] in the list",
        "[bold]Quit Terminal completely[/] (Cmd+Q)",
        "Re-open Terminal and run officecleanup again",
    ]
    for number, step in enumerate(steps, start=1):
        console.print(f"  {number}. {step}")
    console.print()
    console.print("[info]Quick access:[/] run this command to open the settings directly:")
    console.print(f"     [bold]open {FULL_DISK_ACCESS_URL}[/]\n")


def print_audit_summary(summary: RunSummary) -> None:
    """Print the closing audit summary with next steps."""
    console.print()
    print_header("Audit Summary")

    if summary.clean:
        print_success("No Microsoft Office items found on this system!")
        print_success("Your Mac appears to be clean of Microsoft software.")
        return

    console.print(f"[warning]Found {summary.found_count} Microsoft items on this system.[/]\n")
    print_info("To remove all items, run:")
    console.print("     [bold]sudo officecleanup --remove[/]\n")
    print_info("To skip confirmations, add --force:")
    console.print("     [bold]sudo officecleanup --remove --force[/]\n")
    print_warning("If app containers fail to remove, Terminal needs Full Disk Access.")
    print_info("See: System Settings → Privacy & Security → Full Disk Access → Terminal")


def print_removal_summary(summary: RunSummary) -> None:
    """Print the closing removal summary and the remaining manual steps."""
    console.print()
    print_header("Removal Summary")
    print_success(f"Successfully removed {summary.removed_count} Microsoft items.")

    if summary.needs_full_disk_access:
        console.print()
        console.print(
            f"[protected]{summary.protected_count} containers are protected by macOS sandbox.[/]\n"
        )
        print_full_disk_access_instructions()
        console.print("[bold]After enabling Full Disk Access:[/]")
        console.print("  1. Quit Terminal completely (Cmd+Q)")
        console.print("  2. Re-open Terminal")
        console.print("  3. Run: [info]sudo officecleanup --remove --force[/]")

    console.print()
    print_info("Manual steps remaining:")
    console.print("  1. Check Login Items: System Settings → General → Login Items")
    console.print("  2. Remove Microsoft apps from your Dock (right-click → Remove from Dock)")
    console.print("  3. Empty your Trash")


def print_summary(summary: RunSummary) -> None:
    """Dispatch to the audit or removal summary."""
    if summary.mode == RunMode.AUDIT:
        print_audit_summary(summary)
    else:
        print_removal_summary(summary)
