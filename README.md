# confprobe

Tools for studying how a program's configuration options affect its behaviour.
The package has two parts. The first instruments a program's source code so
that it records which options are exercised. The second generates sets of
configuration test cases.

## Instrumenting source code

`confprobe-instrument` reads a plan file that names a source tree and the
configuration options to track. For each option, the plan lists the source
files and functions where that option is used. The command then:

1. converts every C (`.c`), C++ (`.cc`, `.cpp`, `.cxx`, `.c++`) and Java
   (`.java`) file in the tree to srcML XML under `temp_<program>/`. Other
   files are copied unchanged into `<program>/`. Both directories are created
   in the current directory.
2. inserts `insert_count((char *)"<option>");` before each statement of every
   named function. It also adds `#include <insertFile.h>` before the first
   include, or `import java.io.IO;` before the first import in Java files.
3. converts the XML back to source under `<program>/`.
4. removes `temp_<program>/`.

The `srcml` executable must be on your `PATH`. Errors are printed to the
terminal and also appended to `errorInfo.log` in the current directory.

An example plan:

```ini
[environmentConf]
srcPath = /home/user/projects/myprog

[configInfo]
configNum = 1
configName = maxmemory

[maxmemory]
InsertNum = 1
srcPath_1 = src/evict.c
funcName_1 = performEvictions
```

`configName` holds the option names separated by `:`. Each option has its own
section. Labels and keys are matched case-insensitively, and spaces in values
are removed.

Run the command with:

```
confprobe-instrument
```

By default it reads `../input.conf`. You can name another plan file with
`-c`/`--config`:

```
confprobe-instrument --config path/to/input.conf
```

The command exits with status 1 if the plan cannot be read.

From Python, you can drive the steps yourself:

```python
from confprobe.sources import load_software_conf, get_program_name
from confprobe.pipeline import Instrumenter

conf = load_software_conf("input.conf")
inst = Instrumenter(conf, get_program_name(conf.src_path))
inst.build_src_to_xml()
inst.build_insert_xml()
inst.build_xml_to_src()
inst.clear_tmp()
```

## Generating configuration samples

`confprobe.confopts.ConfOpt` reads an option description file. By default this
is `../SrcConfOpt.conf`. Each entry takes one of these forms:

```
name 0               # a switch (binary) option
name 1 min max       # a numeric option
```

You can also build the option list from text with `ConfOpt.parse(text)`.

Designs for switch options are in `confprobe.binsamples`:

- `OWSample`: each row turns exactly one option on (`Y`).
- `NOWSample`: each row turns exactly one option off (`N`).
- `PWSample`: each row turns exactly two options on.

Designs for numeric options are in `confprobe.numsamples`:

- `PBSample`: a Plackett-Burman style design.
  - `measurement_num` must be a multiple of `level_num`. The defaults are 49 and 7.
  - The design ends with a row of minimum values.
- `RDSample`: random values on a grid of `step_size`. The default step is 16.
  - `measurement_num` rows are drawn, 50 by default.
  - Duplicate rows are dropped.

Every design has `rows()`, which returns the test cases. It also has `build(path)`,
which writes them as CSV with a header of option names and returns the number
of rows written. The numeric designs accept a `random.Random` instance for
reproducible output.

```python
import random
from confprobe.confopts import ConfOpt
from confprobe.binsamples import OWSample
from confprobe.numsamples import PBSample

options = ConfOpt.parse("cache 0\nthreads 1 1 64\n")
OWSample(options).build("OWSample.csv")
PBSample(options, rng=random.Random(1)).build("PBSAMPLE.csv", 49, 7)
```

## What this package does not do

There is no command for the sampling part. The package does not combine a
numeric design and a switch design into one joint sample file, and it does not
run a test script on the generated samples. Write the individual CSV files
with the classes above and combine them yourself.