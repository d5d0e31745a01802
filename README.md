# titlekit

Building blocks for a console title manager, in pure Python with no
runtime dependencies:

- parsers for title metadata (TMD), tickets, CIA containers, SMDH icon
  files and DS banners;
- path and file-name helpers, archive reference counting and CIA / ticket
  file filters;
- a save-chip driver for cartridge EEPROM and flash, talking through a
  transport object you supply;
- the pause / suspend / quit state shared by background tasks;
- the arithmetic behind drawing the user interface: text wrapping and
  measurement, color blending, power-of-two texture sizing, tiling and
  swizzling, and texture slot bookkeeping;
- a small doubly linked list with a removable iterator.

## Modules

| Module | What it does |
| --- | --- |
| `titlekit.errors` | `make_result`, result-code constants, the `ResultError` exception family, `format_panic` for the fatal-error screen |
| `titlekit.stringutil` | `is_empty`, `truncate`, `file_stem`, `escape_file_name`, `path_file`, `parent_path` |
| `titlekit.linkedlist` | `LinkedList` and `LinkedListIterator` |
| `titlekit.fs` | `ArchiveRefs`, `is_dir`, `ensure_dir`, `encode_utf16_path`, homebrew paths, `get_title_destination`, `filter_cias`, `filter_tickets` |
| `titlekit.data.tmd` | Title ID, content count, content IDs and indices from a TMD |
| `titlekit.data.ticket` | Title ID from a ticket |
| `titlekit.data.cia` | Title ID and SMDH from a CIA |
| `titlekit.data.smdh` | `Smdh` / `SmdhTitle` parsing, `region_to_string`, `select_title` |
| `titlekit.data.bnr` | `Banner` parsing and `select_title` |
| `titlekit.task` | `AptHook` and `TaskState` |
| `titlekit.spi` | `SaveChip`, `page_size`, `capacity`, `detect_chip`, `SaveCard` |
| `titlekit.texture` | `next_pow2`, `texture_dimensions`, `tile_rows`, `swizzle`, `rgba_to_abgr`, `texture_coords`, `TextureSlots` |
| `titlekit.text` | `FontMetrics`, `WrapResult`, `wrap_string`, `string_size`, `string_size_wrap`, `blend_color`, `ColorTable` |

## Examples

Reading a title ID out of a CIA, or out of a ticket:

```python
from pathlib import Path

from titlekit.data import cia, ticket
from titlekit.errors import BadDataError

try:
    title_id = cia.get_title_id(Path("game.cia").read_bytes())
except BadDataError:
    title_id = ticket.get_title_id(Path("game.tik").read_bytes())

print(f"{title_id:016X}")
```

Reading the icon metadata of a CIA and naming its regions:

```python
from titlekit.data import cia, smdh

with open("game.cia", "rb") as stream:
    info = cia.read_smdh(stream)

title = smdh.select_title(info, language=smdh.Language.EN, region=smdh.Region.USA)
print(title.short_description, "-", title.publisher)
print(smdh.region_to_string(info.region))   # e.g. "일본, 북미" or "리전 프리"
```

Where a title gets installed, and where its homebrew files live:

```python
from titlekit import fs

fs.get_title_destination(0x0004000000055D00)  # MediaType.SD
fs.make_3dsx_path("My App")                   # "/3ds/My App/My App.3dsx"
fs.filter_cias("update.CIA", False, None)     # True
```

Escaping names for the file system:

```python
from titlekit.stringutil import escape_file_name

escape_file_name('Title: "Part 2"')  # 'Title_ _Part 2_'
```

Talking to a save chip. `SaveCard` needs an object with a
`transfer(command, answer_size, data, infrared)` method that sends one SPI
command and returns the answer bytes:

```python
from titlekit.spi import SaveCard

card = SaveCard(transport)
chip = card.init_card()          # detected SaveChip
size = card.save_size()          # capacity in bytes
backup = card.read_save(0, size)
card.write_save(backup, 0)
```

Measuring text and sizing textures:

```python
from titlekit.text import FontMetrics, string_size
from titlekit.texture import texture_dimensions

string_size("ab", FontMetrics(line_feed=20))  # (2.0, 20.0)
texture_dimensions(100, 30)                   # (128, 64)
```

## Errors

Every failure a module reports is raised as a subclass of
`titlekit.errors.ResultError` (`InvalidArgumentError`, `BadDataError`,
`OutOfRangeError`, `NotImplementedResult` and so on), and each carries the
numeric result code of the condition in its `code` attribute.

## What the package does not do

titlekit is a library only. It has no command-line program and draws no
screen: the text and texture modules compute layouts and pixel buffers but
render nothing. It does not download anything over the network, has no
clipboard, and has no runner for batch copy or delete jobs; `TaskState`
only tracks whether such work should pause or quit. Save chips are reached
solely through the transport object you pass to `SaveCard` or
`detect_chip`.

## Tests

The test suite uses pytest, listed under the `test` extra:

```
pip install -e ".[test]"
pytest
```