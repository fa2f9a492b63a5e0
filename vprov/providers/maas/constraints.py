"""
Translation of constraint sets, interface bindings and volume requests into
the parameters of the MAAS node acquisition API.

The parameter names and formats are fixed by the MAAS API, see
http://maas.ubuntu.com/docs/api.html#nodes
"""



from pyrsistent import PClass, PVector, field, pvector

from vprov import constraints, error, logging



UNSUPPORTED_CONSTRAINTS = (
    constraints.CPU_POWER,
    constraints.INSTANCE_TYPE,
)



class InterfaceBinding(PClass):
    """
    A requirement that an interface of the acquired node must (or, if
    ``excluded`` is set, must not) be in the given space.
    """

    name = field(type=str, mandatory=True)
    spaceProviderId = field(type=str, mandatory=True)
    excluded = field(type=bool, initial=False)



class VolumeInfo(PClass):
    """
    An extra disk of ``sizeInGB`` requested for the acquired node.
    """

    name = field(type=str, initial='')
    sizeInGB = field(type=int, mandatory=True)
    tags = field(type=PVector, initial=pvector(), factory=pvector)



def parseDelimitedValues(values):
    """
    Splits a signed list into the lists of positive and negative values.

    Entries selecting nothing are dropped. They can't appear in validated
    constraints, as empty tag and space names are not allowed.
    """

    positives = []
    negatives = []

    for selector in constraints.selectors(values):
        if selector.excluded:
            negatives.append(selector.value)
        else:
            positives.append(selector.value)

    return positives, negatives



def convertTagsToParams(params, tags):
    """
    Adds the positive and negative tags as the comma separated ``tags`` and
    ``not_tags`` parameters. Empty lists are omitted.
    """

    if not tags:
        return

    positives, negatives = parseDelimitedValues(tags)

    if positives:
        params['tags'] = ','.join(positives)
    if negatives:
        params['not_tags'] = ','.join(negatives)



def convertSpacesToBindings(spaces):
    """
    Converts the positive and negative spaces into interface bindings with
    zero-based numeric names, positive spaces first.
    """

    if not spaces:
        return []

    positives, negatives = parseDelimitedValues(spaces)

    bindings = []

    for excluded, values in ((False, positives), (True, negatives)):
        for space in values:
            bindings.append(InterfaceBinding(name=str(len(bindings)),
                    spaceProviderId=space, excluded=excluded))

    return bindings



def addInterfaces(params, bindings):
    """
    Adds the given interface bindings as the ``interfaces`` and
    ``not_networks`` parameters.

    Raises ``error.InvalidBinding`` if a binding has an empty name or space
    provider ID, or if a name is used more than once. In this case ``params``
    is left untouched.
    """

    positives = []
    negatives = []
    names = set()

    for binding in bindings:
        if not binding.name:
            raise error.InvalidBinding('interface bindings cannot have '
                    'empty names')

        if not binding.spaceProviderId:
            raise error.InvalidBinding('invalid interface binding {0!r}: '
                    'space provider ID is required'.format(binding.name))

        if binding.name in names:
            raise error.InvalidBinding('duplicated interface binding '
                    '{0!r}'.format(binding.name))

        names.add(binding.name)

        if binding.excluded:
            negatives.append('space:{0}'.format(binding.spaceProviderId))
        else:
            positives.append('{0}:space={1}'.format(binding.name,
                    binding.spaceProviderId))

    if positives:
        params['interfaces'] = ';'.join(positives)
    if negatives:
        params['not_networks'] = ','.join(negatives)



def formatVolume(volume):
    """
    Formats a volume as ``[name:]size[(tag,...)]``.
    """

    entry = str(volume.sizeInGB)

    if volume.name:
        entry = '{0}:{1}'.format(volume.name, entry)

    if volume.tags:
        entry += '({0})'.format(','.join(volume.tags))

    return entry



def addStorage(params, volumes):
    """
    Adds the requested volumes as the ``storage`` parameter, e.g.
    ``root:0(ssd),data:20(magnetic,5400rpm),45``.
    """

    if volumes:
        params['storage'] = ','.join(formatVolume(v) for v in volumes)



class ConstraintTranslator(object):
    """
    Converts constraint sets into MAAS acquisition parameters.

    Translation has no side effects besides logging a warning for the
    ``cpu-power`` constraint, which MAAS has no way to honor and which is
    dropped.
    """

    def __init__(self, log=None):
        if log is None:
            log = logging.Logger(__name__, system='maas')
        self.log = log


    def convertConstraints(self, cons):
        params = {}

        if cons.arch is not None:
            # MAAS uses the same architecture names
            params['arch'] = cons.arch

        if cons.cpuCores is not None:
            params['cpu_count'] = str(cons.cpuCores)

        if cons.mem is not None:
            params['mem'] = str(cons.mem)

        convertTagsToParams(params, cons.tags)

        if cons.cpuPower is not None:
            self.log.warning("ignoring unsupported constraint 'cpu-power'")

        return params


    def translate(self, cons, volumes=(), bindings=()):
        """
        Returns the dictionary of acquisition parameters for the ``cons``
        constraint set.

        The spaces of the constraint set are converted to interface bindings,
        followed by the explicitly requested ``bindings``.

        Raises ``error.InvalidBinding`` if the resulting bindings are not
        valid.
        """

        params = self.convertConstraints(cons)

        addInterfaces(params, convertSpacesToBindings(cons.spaces) +
                list(bindings))
        addStorage(params, volumes)

        return params
