"""Swaypad - toggle applications between launched, focused and the sway scratchpad.

One keybinding per application: the first press launches it, the next one
focuses it, pressing again while it is focused hides it in the scratchpad.
The window state is re-read from sway's tree on every invocation.
"""
