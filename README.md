# felsim

`felsim` is a library of building blocks for free-electron laser
simulations. It reads input decks made of `&name ... &end` elements and
turns their elements into the pieces a run is set up from: the time
window, longitudinal profiles, parameter sequences, a quietly loaded
electron beam (with optional shot noise), Gauss-Hermite radiation fields
and the wakefield potentials of the beam pipe.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## The input deck format

An input deck is a list of elements. Each element starts with a line
`&name`, holds one `key = value` per line and ends with `&end` (`&END`
and `&End` are accepted too). Lines starting with `#` and empty lines are
ignored, and element names are lower-cased.

`felsim.parser.parse_text(text)` yields `(element, keywords)` pairs, one
per element; `felsim.parser.read_input(path)` does the same for a file.
Malformed decks raise `felsim.parser.ParseError`.

A value of the form `@label` refers to a profile defined earlier, so that
the parameter varies along the bunch. Unknown keywords and references to
undefined profiles raise `felsim.textproc.InputError`.

## Building a run from a deck

```python
from types import SimpleNamespace

from felsim.loadbeam import BeamRecord, load_beam
from felsim.loadfield import load_field
from felsim.parser import parse_text
from felsim.profile import ProfileSet
from felsim.timewindow import TimeWindow

deck = """
&time
slen = 2e-9
sample = 1
&end

&profile_gauss
label = beamcurrent
c0 = 3000
s0 = 1e-9
sig = 4e-10
&end

&beam
current = @beamcurrent
delgam = 1.0
ex = 0.4e-6
ey = 0.4e-6
&end

&field
power = 5e3
waist_size = 30e-6
ngrid = 51
&end
"""

# Reference values a run is set up with.
setup = SimpleNamespace(lambda0=1e-10, gamma0=11350.3, one4one=False,
                        shotnoise=True, npart=512, nbins=4, seed=123456789)

window = TimeWindow(rank=0, size=1)
profiles = ProfileSet()
beam = BeamRecord()
fields = []

for element, args in parse_text(deck):
    if element == "&time":
        window.configure(args, setup.lambda0)
    elif element.startswith("&profile_"):
        profiles.add(element, args)
    elif element == "&beam":
        load_beam(args, setup, window, profiles, beam)
    elif element == "&field":
        load_field(args, setup, window, profiles, fields)

print(len(beam.slices), len(beam.slices[0]), fields[0].slices[0].shape)
```

`load_beam` and `load_field` take any object with the attributes shown in
`setup` (`load_field` needs only `lambda0`).

## Modules

- `felsim.timewindow.TimeWindow` – slicing of the bunch: `configure`
  applies a `&time` element (`s0`, `slen`, `sample`, `time`),
  `finish_init` recomputes the slicing for a new reference wavelength,
  `positions()` lists the slice positions and `sample_rate()` the slice
  spacing. With `rank` and `size` the slices are shared out to several
  nodes (`node_nslice`, `node_offset`).
- `felsim.profile` – `ProfileConst`, `ProfilePolynom`, `ProfileStep`,
  `ProfileGauss` and the collection `ProfileSet` (`add`, `check`,
  `value`) for `&profile_const`, `&profile_polynom`, `&profile_step` and
  `&profile_gauss`.
- `felsim.series` – `SeriesConst`, `SeriesPower`, `SeriesRandom` and
  `SeriesSet` for `&sequence_const`, `&sequence_power` and
  `&sequence_random`; each call to `value` gives the next value, for
  tapers and undulator errors.
- `felsim.loadbeam` – `load_beam` fills a `BeamRecord` from a `&beam`
  element (`gamma`, `delgam`, `current`, `ex`, `ey`, `betax`, `betay`,
  `alphax`, `alphay`, `xcenter`, `ycenter`, `pxcenter`, `pycenter`,
  `bunch`, `bunchphase`, `emod`, `emodphase`; each a number or a
  `@label`).
- `felsim.quietloading` – `QuietLoader.load` generates the particles of
  one slice from a `BeamSlice`, using Hammersley sequences or, in
  one-to-one mode, a random stream; `Particle` holds one particle.
- `felsim.shotnoise.ShotNoise.apply` adds the shot noise of a finite
  number of electrons to a loaded slice.
- `felsim.loadfield` – `load_field` generates, replaces or accumulates
  the `FieldRecord` of one harmonic from a `&field` element.
- `felsim.gausshermite` – `load_gauss` fills an `ngrid` x `ngrid` complex
  grid with the Gauss-Hermite mode described by a `FieldSlice`;
  `hermite` evaluates Hermite polynomials.
- `felsim.wake` – `setup_wake` computes a `WakeResult` from a `&wake`
  element: resistive wall (`conductivity`, `relaxation`, or
  `material = Cu` / `Al`), geometric gaps (`gap`, `lgap`), surface
  roughness (`hrough`, `lrough`) and an external loss (`loss`). The single
  wakes are also available as `resistive_wake`, `geometric_wake` and
  `roughness_wake`.
- `felsim.sorting.Sorting` – moves particles into the slice their phase
  belongs to (`local_sort`) and drops those outside the kept window
  (`global_sort`).
- `felsim.sequences` – the uniform random generator `RandomU` and the
  `Hammersley` sequence.
- `felsim.besselj.bessel_j` and `felsim.inverfc.inverfc` – Bessel
  functions of integer order and the inverse complementary error
  function.
- `felsim.constants` – physical constants and `version_string()`.

Progress messages go to the standard `logging` module under the
`felsim` loggers.

## What the package does not do

`felsim` has no command-line program and no driver that runs a whole
input deck: the caller dispatches the elements, as in the example above,
and supplies the run's reference values. It does not handle the
`&setup`, `&alter_setup`, `&lattice`, `&track` or output elements, does
not parse lattice files, does not track the beam or the field through an
undulator, and writes no output files. Profiles read from data files
(`&profile_file`) are rejected with an `InputError`.