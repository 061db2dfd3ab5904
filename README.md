# mineswept

Minesweeper on a square grid that grows as you win. The first game is played on
a 5×5 grid. Each time you clear a board, the next one is one row and one column
larger, up to 20×20. If you lose, the next game is played at the same size.

## Installing

```
pip install mineswept
```

## Playing

```
mineswept
```

A welcome screen opens first. Click anywhere to close it; this also starts the
background music. The game clock does not run while the welcome screen is shown.

- Left-click a hidden cell to reveal it. A cell with no mines around it opens
  its neighbours too.
- Right-click a hidden cell to place a flag, and right-click it again to remove
  the flag.
- A number shows how many of the eight neighbouring cells hold mines.
- When a numbered cell has as many flags around it as its number, click it with
  one mouse button while holding the other to reveal all of its unflagged
  neighbours. If one of those flags is in the wrong place, the game is lost.
- The four corner cells never hold a mine.
- About 15% of the cells on each board hold mines (at least one). Above the grid
  the game shows the number of mines minus the number of flags, and a timer.
- After a game is won or lost, click to go on to the next game.

Alt+Enter toggles full screen. The window can be resized; the board is scaled to
fit it.

### Menus

- **File → New Game** goes back to the starting grid size.
- **File → Custom Game** asks for a size from 5 to 20. Only digits and `x` can be
  typed, so `12` and `12x12` both work. Values below 5, or text that is not a
  number, become 5; values above 20 become 20. Press Enter or click OK to start;
  click outside the dialog to cancel.
- **File → Save Game / Load Game** writes the current game to a file, or reads
  one back, under the file name you type. A file that cannot be written or read
  is ignored and the game carries on unchanged.
- **File → Quit** closes the game.
- **Options → Toggle Music** pauses or resumes the background music.
- **Help → About** shows a short summary of the rules.

### Touch mode

```
mineswept --mobile
```

In touch mode the game starts on a 3×3 grid and ends at 8×8, and the File menu
has no Custom Game entry. Tap a cell to reveal it. Hold a cell for 0.3 s to place
or remove a flag. Tap a numbered cell to reveal its neighbours.

### Images and sounds

Images and sounds are read from a `data` directory in the current working
directory: `bomb.png`, `flag.png`, `1.png` to `8.png`, `background.jpg`,
`music.mp3`, `hit.mp3` and `action.mp3`. None of these come with the package.
Any image that is missing is replaced by a simple drawn shape or a plain
background, and any missing sound is simply not played. Text is drawn with
pygame's default font.

## Using the game logic from Python

The rules are in `mineswept.board`, separate from drawing and input:

```python
import random
from mineswept.board import Board, Outcome

board = Board.random(9, random.Random(1))
outcome = board.reveal(0, 0)   # corners are always safe
if outcome is Outcome.WON:
    print("cleared")
```

`Board.from_mines` builds a board from a fixed square pattern of mines.
`Board.toggle_flag` and `Board.chord` cover flagging and revealing around a
number; each move returns an `Outcome` (`IGNORED`, `SAFE`, `LOST` or `WON`).

`mineswept.session.Session` adds the game clock, level progression, touch
handling and sound cues on top of a board; `Session.save` and `Session.load`
write and read save files. `mineswept.savefile` holds the file format itself:
`encode` and `decode` turn a `SavedGame` into little-endian binary data and back,
and raise `SaveFileError` for data that is truncated or malformed.