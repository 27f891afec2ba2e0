"""The interactive menu shown once the user is signed in.

Each iteration prints the options, reads one line, and dispatches on it.
Anything that is not one of the listed numbers is reported as an invalid
choice and the menu is shown again; only ``0`` (or end of input) leaves
the loop.
"""

from __future__ import annotations

from typing import Callable, Optional

from graph_tutorial.models import MenuChoice, Session
from graph_tutorial.output import debug, print_data

MENU_LINES = (
    "Please choose one of the following options:",
    "0. Exit",
    "1. Display access token",
    "2. List calendar events",
)

EventLister = Callable[[Session], None]


def parse_choice(line: str) -> Optional[MenuChoice]:
    """Parse a line of input into a :class:`MenuChoice`.

    Returns ``None`` for text that is not an integer and for integers
    outside the menu.
    """
    try:
        value = int(line)
    except ValueError:
        return None
    try:
        return MenuChoice(value)
    except ValueError:
        return None


def run_menu(
    session: Session,
    read_line: Callable[[], str] = input,
    list_events: Optional[EventLister] = None,
) -> None:
    """Run the menu until the user chooses to exit.

    Args:
        session: Signed-in session holding the access token.
        read_line: Returns the next line of user input; raises
            :class:`EOFError` when input is exhausted.
        list_events: Called with the session for option 2. When ``None``
            the option does nothing.
    """
    while True:
        for line in MENU_LINES:
            print_data(line)

        try:
            raw = read_line()
        except EOFError:
            debug("End of input; leaving the menu")
            choice: Optional[MenuChoice] = MenuChoice.EXIT
        else:
            choice = parse_choice(raw)

        if choice is MenuChoice.EXIT:
            print_data("Goodbye...")
            return
        elif choice is MenuChoice.DISPLAY_TOKEN:
            print_data(f"Access token: {session.access_token}\n")
        elif choice is MenuChoice.LIST_EVENTS:
            if list_events is not None:
                list_events(session)
            else:
                debug("Calendar listing is not available in this build")
        else:
            print_data("Invalid choice! Please try again.")
