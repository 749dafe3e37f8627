from __future__ import annotations

import shutil
import subprocess

# Tried in order; the first one installed is used.
COMMANDS = [
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["pbcopy"],
]

def copy_text(text: str) -> None:
    for cmd in COMMANDS:
        if shutil.which(cmd[0]) is None:
            continue
        subprocess.run(cmd, input=text.encode("utf-8"), check=True)
        return
    raise RuntimeError("No clipboard command available")
