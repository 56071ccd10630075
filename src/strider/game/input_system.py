from __future__ import annotations

from collections.abc import Iterable

from panda3d.core import LVector2f

# (forward, back, right, left) letters per keyboard layout. Arrows and the Cyrillic (RU/UA)
# letters on the same physical keys work with every layout.
LAYOUTS: dict[str, tuple[str, str, str, str]] = {
    "qwerty": ("w", "s", "d", "a"),
    "azerty": ("z", "s", "d", "q"),
}
_FORWARD_KEYS = frozenset({"ц", "arrow_up"})
_BACK_KEYS = frozenset({"ы", "і", "arrow_down"})
_RIGHT_KEYS = frozenset({"в", "arrow_right"})
_LEFT_KEYS = frozenset({"ф", "arrow_left"})
_JUMP_KEYS = frozenset({"space"})


def normalize_key_name(key: str) -> str | None:
    k = (key or "").strip().lower()
    if not k:
        return None
    aliases = {
        "spacebar": "space",
        "up": "arrow_up",
        "down": "arrow_down",
        "left": "arrow_left",
        "right": "arrow_right",
    }
    if k in aliases:
        return aliases[k]
    if k.startswith("raw-") and len(k) > 4:
        return k[4:]
    return k


def move_axes_from_keys(held: Iterable[str], *, layout: str = "qwerty") -> tuple[int, int]:
    """Return `(right, forward)` in {-1, 0, 1} for a set of held key names."""

    try:
        fwd_key, back_key, right_key, left_key = LAYOUTS[layout]
    except KeyError:
        raise ValueError(f"unknown keyboard layout {layout!r}; expected one of {sorted(LAYOUTS)}") from None
    keys = {k for k in (normalize_key_name(x) for x in held) if k}
    fwd = 0
    right = 0
    if fwd_key in keys or keys & _FORWARD_KEYS:
        fwd += 1
    if back_key in keys or keys & _BACK_KEYS:
        fwd -= 1
    if right_key in keys or keys & _RIGHT_KEYS:
        right += 1
    if left_key in keys or keys & _LEFT_KEYS:
        right -= 1
    return (right, fwd)


def move_vector(axes: tuple[int, int]) -> LVector2f:
    """Stick-style move vector for key axes; diagonals are normalized to unit length."""

    vec = LVector2f(float(axes[0]), float(axes[1]))
    if vec.lengthSquared() > 1.0:
        vec.normalize()
    return vec


class KeyboardInputSampler:
    """
    Converts per-tick held-key sets into controller callbacks.

    Move is reported on change and canceled on release; jump fires on the press edge only.
    """

    def __init__(self, controller, *, layout: str = "qwerty") -> None:
        if layout not in LAYOUTS:
            raise ValueError(f"unknown keyboard layout {layout!r}; expected one of {sorted(LAYOUTS)}")
        self.controller = controller
        self.layout = layout
        self._prev_move = (0, 0)
        self._prev_jump_down = False

    def reset(self) -> None:
        self._prev_move = (0, 0)
        self._prev_jump_down = False

    def sample(self, held: Iterable[str]) -> None:
        held = [k for k in (normalize_key_name(x) for x in held) if k]
        move = move_axes_from_keys(held, layout=self.layout)
        if move != self._prev_move:
            if move == (0, 0):
                self.controller.on_move_canceled()
            else:
                self.controller.on_move(move_vector(move))
        self._prev_move = move

        jump_down = any(k in _JUMP_KEYS for k in held)
        if jump_down and not self._prev_jump_down:
            self.controller.on_jump(edge_triggered=True)
        self._prev_jump_down = jump_down


__all__ = [
    "LAYOUTS",
    "KeyboardInputSampler",
    "move_axes_from_keys",
    "move_vector",
    "normalize_key_name",
]
