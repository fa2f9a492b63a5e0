"""
Backend agnostic resource constraints and the validator used by backends to
declare which constraints and values they support.

Tags and spaces are signed lists: each entry selects or, when prefixed with
``EXCLUSION_MARKER``, excludes a value. The prefixed string form only exists
at the boundaries (parsing and backend encoding), entries are held as
``Selector`` records everywhere else.
"""



import math
import re

from pyrsistent import PClass, PVector, field, pvector

from vprov import error



ARCH = 'arch'
CPU_CORES = 'cpu-cores'
CPU_POWER = 'cpu-power'
MEM = 'mem'
INSTANCE_TYPE = 'instance-type'
TAGS = 'tags'
SPACES = 'spaces'

CONSTRAINT_NAMES = (ARCH, CPU_CORES, CPU_POWER, MEM, INSTANCE_TYPE, TAGS,
        SPACES)

LIST_CONSTRAINTS = (TAGS, SPACES)

ATTRIBUTES = {
    ARCH: 'arch',
    CPU_CORES: 'cpuCores',
    CPU_POWER: 'cpuPower',
    MEM: 'mem',
    INSTANCE_TYPE: 'instanceType',
    TAGS: 'tags',
    SPACES: 'spaces',
}

EXCLUSION_MARKER = '^'

MEMORY_MULTIPLIERS = {
    '': 1,
    'M': 1,
    'G': 1024,
    'T': 1024 ** 2,
    'P': 1024 ** 3,
}

MEMORY_PATTERN = re.compile(r'^(\d+(?:\.\d+)?)([MGTP]?)$')



class Selector(PClass):
    """
    A single entry of a signed list, selecting (or excluding, if
    ``excluded`` is set) the given value.
    """

    value = field(type=str, mandatory=True,
            invariant=lambda v: (bool(v), 'selector value cannot be empty'))
    excluded = field(type=bool, initial=False)


    @classmethod
    def parse(cls, raw):
        """
        Parses a signed string. Returns ``None`` for empty and marker-only
        strings, which select nothing.
        """

        if raw in ('', EXCLUSION_MARKER):
            return None

        if raw.startswith(EXCLUSION_MARKER):
            return cls(value=raw[len(EXCLUSION_MARKER):], excluded=True)

        return cls(value=raw)


    def __str__(self):
        if self.excluded:
            return EXCLUSION_MARKER + self.value
        return self.value



def selectors(values):
    """
    Converts an iterable of signed strings and/or ``Selector`` instances to a
    list of selectors, dropping the entries which select nothing.
    """

    result = []

    for value in values:
        if isinstance(value, str):
            value = Selector.parse(value)

        if value is not None:
            result.append(value)

    return result



def _selectorVector(values):
    if values is None:
        return None
    return pvector(selectors(values))



def _optional(*types):
    return types + (type(None),)



class ConstraintSet(PClass):
    """
    An abstract resource request. Every constraint is independently optional
    and ``None`` means unset, which is not the same as zero.

    ``mem`` is expressed in MiB. ``tags`` and ``spaces`` accept any iterable
    of signed strings or selectors.
    """

    arch = field(type=_optional(str), initial=None)
    cpuCores = field(type=_optional(int), initial=None)
    cpuPower = field(type=_optional(int), initial=None)
    mem = field(type=_optional(int), initial=None)
    instanceType = field(type=_optional(str), initial=None)
    tags = field(type=_optional(PVector), initial=None,
            factory=_selectorVector)
    spaces = field(type=_optional(PVector), initial=None,
            factory=_selectorVector)


    def value(self, name):
        try:
            return getattr(self, ATTRIBUTES[name])
        except KeyError:
            raise ValueError('unknown constraint {0!r}'.format(name))


    def hasValue(self, name):
        value = self.value(name)

        if value is None:
            return False

        if name in LIST_CONSTRAINTS:
            return len(value) > 0

        return True


    def names(self):
        """
        Returns the names of the constraints having a non-empty value.
        """

        return [name for name in CONSTRAINT_NAMES if self.hasValue(name)]


    def without(self, name):
        """
        Returns a copy of this constraint set with the given constraint unset.
        """

        self.value(name)
        return self.set(ATTRIBUTES[name], None)


    def __str__(self):
        entries = []

        for name in self.names():
            value = self.value(name)

            if name in LIST_CONSTRAINTS:
                value = ','.join(str(s) for s in value)
            elif name == MEM:
                value = '{0}M'.format(value)

            entries.append('{0}={1}'.format(name, value))

        return ' '.join(entries)



def parseCount(name, value):
    try:
        count = int(value)
    except ValueError:
        count = -1

    if count < 0:
        raise error.InvalidConstraintValue('bad {0} constraint: expected '
                'non-negative integer, got {1!r}'.format(name, value))

    return count



def parseMemory(value):
    """
    Parses a memory size with an optional ``M``, ``G``, ``T`` or ``P``
    suffix and returns it in MiB, rounded up.
    """

    match = MEMORY_PATTERN.match(value)

    if match is None:
        raise error.InvalidConstraintValue('bad {0} constraint: must be a '
                'non-negative float with optional M/G/T/P suffix, got '
                '{1!r}'.format(MEM, value))

    amount, suffix = match.groups()

    return int(math.ceil(float(amount) * MEMORY_MULTIPLIERS[suffix]))



def parse(text):
    """
    Parses the textual form of a constraint set, a whitespace separated list
    of ``name=value`` entries, e.g.::

        arch=amd64 cpu-cores=4 mem=4G tags=ssd,^slow spaces=db,^dmz

    An empty value leaves the constraint unset.

    Raises ``error.InvalidConstraintValue`` on unknown, repeated or malformed
    entries.
    """

    values = {}
    seen = set()

    for entry in text.split():
        name, sep, value = entry.partition('=')

        if not sep:
            raise error.InvalidConstraintValue(
                    'malformed constraint {0!r}'.format(entry))

        if name not in ATTRIBUTES:
            raise error.InvalidConstraintValue(
                    'unknown constraint {0!r}'.format(name))

        if name in seen:
            raise error.InvalidConstraintValue(
                    'constraint {0!r} specified more than once'.format(name))
        seen.add(name)

        if not value:
            continue

        if name in (CPU_CORES, CPU_POWER):
            value = parseCount(name, value)
        elif name == MEM:
            value = parseMemory(value)
        elif name in LIST_CONSTRAINTS:
            value = value.split(',')

        values[ATTRIBUTES[name]] = value

    return ConstraintSet(**values)



class Validator(object):
    """
    Validates constraint sets against the capabilities declared by a
    backend.

    A constraint name is either unsupported, restricted to a vocabulary or
    unrestricted. Once populated by the backend, a validator is only read.
    """

    def __init__(self):
        self.unsupported = set()
        self.vocabulary = {}


    def checkName(self, name):
        if name not in ATTRIBUTES:
            raise ValueError('unknown constraint {0!r}'.format(name))


    def registerUnsupported(self, names):
        """
        Marks the given constraint names as never honored by the backend.
        """

        for name in names:
            self.checkName(name)

            if name in self.vocabulary:
                raise ValueError('constraint {0!r} has a registered '
                        'vocabulary and cannot be unsupported'.format(name))

            self.unsupported.add(name)


    def registerVocabulary(self, name, values):
        """
        Restricts the allowed values of the ``name`` constraint. For signed
        list constraints, each entry is checked without its exclusion marker.
        """

        self.checkName(name)

        if name in self.unsupported:
            raise ValueError('constraint {0!r} is unsupported and cannot have '
                    'a vocabulary'.format(name))

        self.vocabulary[name] = frozenset(values)


    def validate(self, cons, strict=False):
        """
        Validates the ``cons`` constraint set.

        Returns a tuple made of the effective constraint set, with all
        unsupported constraints unset, and of a list of
        ``error.UnsupportedConstraint`` warnings, one for each constraint
        which was removed. If ``strict`` is true, the first unsupported
        constraint is raised instead.

        Raises ``error.InvalidConstraintValue`` if a value is not part of the
        registered vocabulary.
        """

        effective = cons
        warnings = []

        for name in cons.names():
            if name in self.unsupported:
                warning = error.UnsupportedConstraint(name)

                if strict:
                    raise warning

                warnings.append(warning)
                effective = effective.without(name)

        for name, allowed in sorted(self.vocabulary.items()):
            if not effective.hasValue(name):
                continue

            value = effective.value(name)

            if name in LIST_CONSTRAINTS:
                values = [s.value for s in value]
            else:
                values = [value]

            for value in values:
                if value not in allowed:
                    raise error.InvalidConstraintValue('invalid constraint '
                            'value: {0}={1}\nvalid values are: {2}'.format(
                                    name, value,
                                    ', '.join(sorted(map(str, allowed)))))

        return effective, warnings
