# ftkit

A compact toolkit of everyday helpers with the behaviour of the classic C
library routines, plus a printf-style formatter, a line reader and a
command pipeline runner.

- `ftkit.ascii`: character classification and case conversion
  (`is_alnum`, `is_alpha`, `is_ascii`, `is_digit`, `is_print`,
  `to_lower`, `to_upper`). Each takes an integer code or a one-character
  string; the case conversions return the same kind they were given.
- `ftkit.convert`: `atoi` (leading whitespace, one sign, digits, result
  narrowed to a 32-bit int) and `itoa` (raises `OverflowError` outside the
  32-bit range).
- `ftkit.memory`: byte-buffer helpers over `bytearray` (`memset`, `bzero`,
  `memcpy`, `memmove`, `memchr`, `memcmp`, `calloc`). `memmove` copies
  between offsets inside one buffer; `memchr` returns an offset or `None`.
- `ftkit.strings`: searching, comparing, slicing, joining, trimming and
  splitting (`find_char`, `find_last_char`, `compare`, `compare_n`,
  `find_in`, `substr`, `join`, `trim`, `split`, `map_indexed`,
  `iter_indexed`, `strlcpy`, `strlcat`). Searches return an index or
  `None`; `strlcpy` and `strlcat` return the resulting text together with
  the length the C routine would report.
- `ftkit.linked`: a singly linked list (`Node`, `LinkedList` with
  `push_front`, `push_back`, `last`, `clear`, `iterate`, `map`, `len()` and
  iteration over contents).
- `ftkit.printf`: a small printf supporting `%c %s %p %d %i %u %x %X %%`
  and the `#`, `+` and space flags (`format_string`, `printf`,
  `FormatError`). Unknown conversions are echoed with their percent sign;
  a malformed format or missing argument raises `FormatError`, whose
  `partial` attribute holds the text rendered before the problem.
- `ftkit.lines`: reading a file descriptor one line at a time
  (`LineReader`, `get_next_line`). Lines are returned as `bytes`, newline
  included; `None` marks the end. Several descriptors can be read in any
  interleaving.
- `ftkit.pipeline`: running commands connected by pipes between an input
  and an output file (`run_pipeline`, `run_heredoc`, `resolve_command`,
  `find_executable`, `PipexError`). Commands are split on spaces and looked
  up on the `PATH` of the given environment; the result is the exit status
  of the last command.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Examples

```python
from ftkit.strings import split, trim, strlcpy
from ftkit.printf import format_string
from ftkit.linked import LinkedList

split("  hello  world ", " ")         # ['hello', 'world']
trim("xxabcxx", "x")                  # 'abc'
strlcpy("hello", 3)                   # ('he', 5)
format_string("%+d and %#x", 42, 255) # '+42 and 0xff'

items = LinkedList([1, 2])
items.push_front(0)
list(items)                           # [0, 1, 2]
len(items)                            # 3
```

Reading lines:

```python
import os
from ftkit.lines import LineReader

reader = LineReader(1024)
fd = os.open("notes.txt", os.O_RDONLY)
try:
    while (line := reader.read_line(fd)) is not None:
        print(line.decode(), end="")
finally:
    os.close(fd)
```

Running a pipeline from Python:

```python
from ftkit.pipeline import run_pipeline

status = run_pipeline("infile", ["grep foo", "wc -l"], "outfile")
```

## Commands

`ftkit-pipex` runs a chain of commands, the first reading from an input file
and the last writing to an output file (truncated), much like
`< infile cmd1 | cmd2 | ... > outfile` in a shell:

```
ftkit-pipex infile "grep foo" "wc -l" outfile
```

With `here_doc` as the first argument, standard input is read up to a line
holding only the limiter, and the output file is appended to:

```
ftkit-pipex here_doc END "cat" "wc -l" outfile
```

`ftkit-lines` takes file names and prints four rounds of lines from them,
one line from each file per round; a file with no more lines contributes
`(null)`:

```
ftkit-lines first.txt second.txt third.txt
```

## What it does not do

There are no helpers for writing characters, strings or numbers straight to
a file descriptor; use `os.write` or the `printf` function, which writes to
standard output. Commands in a pipeline are not run through a shell, so
quoting, globbing and redirection inside a command string are not
interpreted.