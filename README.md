# bonobo

Building blocks for small real-time 3D applications, written with Python
and numpy. Matrices and vectors are numpy arrays; 4x4 matrices multiply
column vectors (`matrix @ (x, y, z, 1)`).

## Modules

- `bonobo.transform`
  - `TRSTransform`: a transform composed as `M = T * R * S`. Relative
    operations (`translate`, `scale`, `rotate`, `rotate_x/y/z`,
    `pre_rotate`, `pre_rotate_x/y/z`), absolute ones (`set_translate`,
    `set_scale`, `set_rotate`, `set_rotate_x/y/z`), `look_towards` and
    `look_at`, accessors (`translation`, `rotation`, `scaling`), the
    matrices `matrix`, `matrix_inverse`, `translation_matrix`,
    `rotation_matrix`, `scale_matrix`, their inverses and
    `translation_rotation_matrix`, the direction vectors `up`, `down`,
    `left`, `right`, `front`, `back`, and a plain-text format through
    `to_text` / `load_text`. `scale` and `set_scale` take either a
    3-vector or a single uniform factor.
  - `rotation_matrix(angle, axis)`: a 3x3 rotation of `angle` radians
    around `axis`.
- `bonobo.camera`
  - `FPSCamera(fovy, aspect, near, far)`: a `TRSTransform` (`world`) with
    a perspective projection. `update(delta_time, input_handler,
    ignore_key_events, ignore_mouse_events)` rotates the camera while the
    left mouse button is held and moves it with W/S, A/D and Q/E (left
    Control slows to a quarter, left Shift speeds up four times);
    `delta_time` is a `timedelta` or a number of seconds. It offers
    `set_projection`, `set_fov`, `set_aspect`, `fov`, `aspect`, the
    view/world/clip matrices (`view_to_world_matrix`,
    `world_to_clip_matrix` and so on), `clip_to_view`, `clip_to_world`,
    and `to_text` / `load_text`.
  - `perspective(fovy, aspect, near, far)`: a right-handed projection
    matrix mapping depth to [-1, 1].
- `bonobo.inputs`
  - `InputHandler`: fed with `feed_keyboard(key, scancode, action)`,
    `feed_mouse_buttons(button, action)` and `feed_mouse_motion(position)`;
    `advance()` moves to the next tick. `keycode_state`, `scancode_state`
    and `mouse_state` return `KeyState` flags (`PRESSED`, `RELEASED`,
    `JUST_PRESSED`, `JUST_RELEASED`), where "just" means the change
    happened during the previous tick. It also records the mouse position
    at each button's last change and whether the UI has captured the
    mouse or keyboard (`set_ui_capture`).
  - `Action` (`RELEASE`, `PRESS`, `REPEAT`) and `Key` (the key codes the
    camera uses, plus a few others).
- `bonobo.log`
  - `Logger(log_path="log.txt", stdout=None, stderr=None)`: `report(flags,
    file, function, line, log_type, message, *args)` formats a
    printf-style message and writes it to standard output (or standard
    error for error types), to the log file and to a custom sink set with
    `set_custom_output`. Targets are chosen with `set_output_targets`
    using `OutputTarget` flags; `init()` opens the log file when the file
    target is on, `destroy()` closes it, and the logger works as a context
    manager doing both. Per-type `Verbosity` is set with `set_verbosity`
    (`WHISPER` drops messages, `LOUD` prepends the location). The flags
    `MESSAGE_ONCE_FLAG` and `LOCATION_ONCE_FLAG` suppress repeats, counted
    by `hit_count`. `report_param` reports "Bad parameter!" when its test
    is false.
- `bonobo.logview`
  - `LogView(logger=None)`: keeps the last 64 log lines (each cut to 511
    characters); when given a logger it becomes that logger's custom
    sink. `entries(pattern)` lists them oldest first, `color_for` gives an
    RGBA colour per `LogType`, `clear` empties the buffer and
    `consume_scroll_request` tells whether new lines arrived.
  - `pass_filter(pattern, text)`: case-insensitive `"incl,-excl"` filter.
- `bonobo.gldebug`: `DebugType`, `DebugSource`, `DebugSeverity` with the
  OpenGL enum values, `type_name`, `source_name`, `severity_name`,
  `format_debug_message`, and `handle_debug_message(logger, source,
  debug_type, message_id, severity, message)`, which logs a driver
  message as info, warning or error by severity.
- `bonobo.various`: `slurp_file(path, logger=None)` returns a file's text
  (up to any NUL character), or `""` after logging an error if it cannot
  be opened.

## What it does not do

The package does not open windows, create OpenGL contexts, compile
shaders, load meshes or textures, or draw anything, including the log
view. It holds the state and mathematics; events must be fed into
`InputHandler` and matrices passed to a renderer by the calling code.

## Installation

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Example

```python
import math
from datetime import timedelta

from bonobo.camera import FPSCamera
from bonobo.inputs import Action, InputHandler, Key

camera = FPSCamera(math.radians(60.0), 16 / 9, 0.1, 100.0)
inputs = InputHandler()

inputs.feed_keyboard(Key.W, 17, Action.PRESS)
inputs.advance()
camera.update(timedelta(milliseconds=16), inputs, False, False)

print(camera.world.translation())
print(camera.world_to_clip_matrix())
```

```python
import numpy as np

from bonobo.transform import TRSTransform

t = TRSTransform()
t.translate([1.0, 2.0, 3.0])
t.rotate_y(0.5)
t.scale(2.0)
assert np.allclose(t.matrix() @ t.matrix_inverse(), np.eye(4))
```