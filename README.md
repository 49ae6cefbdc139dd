# editos

`editos` holds the parts of a small hobby kernel as plain Python. It covers
the graphics stack (colours, shapes, an in-memory linear framebuffer, a
canvas, an 8x8 bitmap font and a text renderer), the input path (PS/2 scan
codes, key events, modifier tracking and a US keymap), a terminal built on a
gap buffer, a minimal command shell, a kernel log with pluggable sinks, two
heap allocators, a fixed-capacity hash map and a parser for Multiboot2 boot
information.

Every part runs without real hardware: the framebuffer is a `bytearray`, the
keyboard is fed scan code bytes, and the serial port writes to a text stream.

## Modules

| Module | What it provides |
| --- | --- |
| `editos.bits` | power-of-two helpers: `is_pow2`, `one_if_zero`, `floor_pow2`, `ceil_pow2` |
| `editos.units` | byte unit conversions that round up, such as `b_to_mib` and `kib_to_mib`, and `ceil_div` |
| `editos.color` | `Color`, with ARGB packing (`from_argb`, `to_argb`) and named colours such as `Color.black()` |
| `editos.shapes` | `Point`, `Line`, `Rect` and `Sphere`; coordinates wrap as 32-bit unsigned values |
| `editos.klog` | `log_msg`, `log_obj`, `set_sink`, `panic`, `KernelPanic` and the sinks `CallbackSink` and `BufferedSink` |
| `editos.keyboard` | `Key`, `KeyMod`, `KeyEventType`, `KeyEvent`, the `Keyboard` interface, `modifier_for_key`, `is_lock_key` |
| `editos.keymap` | `key_event_to_char` for the US layout |
| `editos.ps2` | `PS2Keyboard`, which decodes fed scan code bytes into key events |
| `editos.bitmap_font` | `BitmapFont` and the built-in 8x8 font from `builtin_font()` |
| `editos.framebuffer` | the `Framebuffer` interface and the in-memory `LinearFramebuffer` |
| `editos.canvas` | `Canvas`, for pixels, filled rectangles, borders and frames |
| `editos.text` | `Style` and `TextRenderer` |
| `editos.window` | `Widget` and `Window` |
| `editos.gap_buffer` | `GapBuffer`, the editing buffer behind the text area |
| `editos.data_view` | `DataView`, `StackStorage`, `HeapStorage` and `SeekType` |
| `editos.heap` | `BitmapHeap`, `BumpHeap`, `align_to` and the kernel heap functions `alloc`, `free`, `set_kernel_heap`, `kernel_heap` |
| `editos.flatmap` | `FlatMap`, an open-addressing map of fixed capacity |
| `editos.boot` | `BootContext`, `MemoryRegion`, the boot enums, `arch_name` and `memory_region_type_name` |
| `editos.multiboot2` | `parse_tags` and `MultibootInfo` |
| `editos.text_area` | `TextArea`, scrolling editable text drawn on a canvas |
| `editos.tty_text_area` | the `Display` interface and `TtyTextArea` |
| `editos.tty` | `Tty`, with line reading and editing keys |
| `editos.system` | `halt`, `reboot` and `shutdown`, which raise `Halted`, `Rebooting` and `ShuttingDown` |
| `editos.shell` | `Shell`, `Command`, `CommandContext` and the `help`, `echo` and `sys` commands |
| `editos.serial` | `SerialBus`, `StreamSerialBus`, `SerialSink` and `get_serial_bus` |
| `editos.kernel` | `build_boot_context`, `memory_map_from` and `enter_kernel` |

## Examples

Rounding to powers of two and converting byte units:

```python
from editos.bits import ceil_pow2, floor_pow2
from editos.units import b_to_mib

ceil_pow2(100, 32)    # 128
floor_pow2(100, 32)   # 64
b_to_mib(1)           # 1: conversions to a larger unit round up
```

Drawing on an in-memory framebuffer:

```python
from editos.canvas import Canvas
from editos.color import Color
from editos.framebuffer import LinearFramebuffer
from editos.shapes import Rect

fb = LinearFramebuffer(4, 4)
Canvas(fb).draw_rect(Rect(1, 1, 2, 2), Color.red())
assert fb.get_pixel(1, 1) == Color.red()
```

Decoding scan codes into characters:

```python
from editos.keymap import key_event_to_char
from editos.ps2 import PS2Keyboard

kb = PS2Keyboard()
kb.feed(0x2A, 0x1E)          # left shift pressed, then A pressed
kb.poll()                    # the shift press
key_event_to_char(kb.poll()) # "A"
```

Editing with a gap buffer:

```python
from editos.gap_buffer import GapBuffer

gb = GapBuffer("hello")
gb.move_to(0)
gb.insert("x")
"".join(gb)   # "xhello"
```

Sending kernel log output anywhere:

```python
from editos.klog import CallbackSink, log_msg, set_sink

chars = []
set_sink(CallbackSink(chars.append))
log_msg("%d KiB available", 640)
"".join(chars)   # "640 KiB available\n"
```

A format that ends in a backslash suppresses the trailing newline. The
supported conversions are `%c`, `%s`, `%d`, `%i`, `%u`, `%x`, `%p`, `%o` and
`%%`; `%o` takes a `Loggable` object, which writes itself with `log_self()`.
`panic` logs its message with the caller's location and raises `KernelPanic`.

## Bringing it together

`build_boot_context` takes Multiboot2 boot information (raw bytes or a
`MultibootInfo`), collects the command line, loader name, memory map and
framebuffer, and installs a `BitmapHeap` as the kernel heap. `enter_kernel`
then logs a summary to the serial bus, clears the screen, draws a window and
runs a `Shell` on a `Tty` that reads from the `Keyboard` you pass in. It ends
only when reading raises, or when `sys reboot` / `sys shutdown` raise a
`SystemStop`; `SystemStop` derives from `BaseException`, so
`except Exception` does not catch it.

## What this package does not do

- It has no command to start it; everything is used from Python code.
- It talks to no real hardware. Framebuffers are memory buffers, keyboards
  are fed bytes, the serial bus writes to a text stream, and `halt`,
  `reboot` and `shutdown` only raise exceptions.
- It does not show the framebuffer on screen; read the pixels back with
  `LinearFramebuffer.get_pixel` or `buffer`.
- The heaps hand out integer addresses and keep the bookkeeping only; they
  store no data.

## Tests

The test suite uses pytest; the `test` extra lists what it needs.