"""Operator Prompts - accept / edit / regenerate, and the editor hand-off."""

import os
import shlex
import subprocess
import sys
import tempfile

from aicommit.output import dim, display_message, print_warning
from aicommit.workflow import Decision

CHOICES = {
    '': Decision.ACCEPT,
    'a': Decision.ACCEPT,
    'accept': Decision.ACCEPT,
    'e': Decision.EDIT,
    'edit': Decision.EDIT,
    'r': Decision.REGENERATE,
    'regenerate': Decision.REGENERATE,
}


def prompt_user(message: str) -> Decision:
    """Show the candidate and block until the operator picks an action.

    Ctrl-C and end of input both surface as KeyboardInterrupt.
    """
    display_message(message)
    while True:
        try:
            answer = input(f"\n{dim('(e)dit, (r)egenerate, or Enter to accept: ')}").strip().lower()
        except EOFError:
            raise KeyboardInterrupt
        if answer in CHOICES:
            return CHOICES[answer]
        print("Enter e, r, or press Enter")


def _editor() -> str:
    editor = os.environ.get('VISUAL') or os.environ.get('EDITOR')
    if not editor:
        editor = 'notepad' if sys.platform == 'win32' else 'vi'
    return editor


def edit_message(message: str) -> str:
    """Open message in user's editor. Returns the edited text, or message if nothing usable came back."""
    tmp = tempfile.NamedTemporaryFile(mode='w', suffix='.gitcommit', delete=False, encoding='utf-8')
    try:
        tmp.write(message)
        tmp.close()
        # EDITOR may carry arguments, e.g. "code --wait"
        subprocess.run([*shlex.split(_editor()), tmp.name], check=True)
        with open(tmp.name, 'r', encoding='utf-8') as f:
            edited = f.read().strip()
    except (subprocess.CalledProcessError, OSError) as e:
        print_warning(f"Warning: Editor failed ({e}), keeping the generated message")
        return message
    finally:
        try:
            os.unlink(tmp.name)
        except OSError as e:
            # Log to stderr so temp files don't silently accumulate
            print_warning(f"Warning: Could not delete temp file {tmp.name}: {e}")
    return edited or message
