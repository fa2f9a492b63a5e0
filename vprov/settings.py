"""
Configuration management for the provisioning layer.
"""



import os
import configparser

from vprov import storage



DEFAULT_FILES = [
    '/etc/vprov/vprov.conf',
    os.path.expanduser('~/.vprov.conf'),
]

STORAGE_SECTION_PREFIX = 'storage:'

PROVIDER_OPTION = 'provider'

BOOLEAN_STATES = configparser.ConfigParser.BOOLEAN_STATES

# Options always kept as strings
STRING_OPTIONS = (
    storage.CONFIG_STORAGE_DIR,
)



def loadConfig(path=None, defaults=None):
    """
    Loads and parses an INI style configuration file using Python's built-in
    configparser module.

    If path (t.p.filepath.Filepath instance) is specified, load it.

    If ``defaults`` (a list of strings) is given, try to load each entry as a
    file, without throwing any error if the operation fails.

    If ``defaults`` is not given, the following locations are tried:

     * /etc/vprov/vprov.conf
     * ~/.vprov.conf

    To completely disable defaults loading, pass in an empty list or ``False``.

    Returns the ConfigParser instance used to load and parse the files.
    """

    if defaults is None:
        defaults = DEFAULT_FILES

    config = configparser.ConfigParser()

    if defaults:
        config.read(defaults)

    if path:
        config.read_string(path.getContent().decode('utf-8'), path.path)

    return config



def coerceValue(value):
    """
    Converts a raw configuration value to a boolean or an integer if it looks
    like one, returns it unchanged otherwise.
    """

    try:
        return int(value)
    except ValueError:
        pass

    return BOOLEAN_STATES.get(value.lower(), value)



def storageConfigs(config):
    """
    Builds a ``StorageConfig`` for each ``[storage:<name>]`` section of the
    given configuration and returns them in a dictionary keyed by name.

    The ``provider`` option of each section defines the provider type, all
    other options are set as attributes of the storage configuration, with
    values looking like integers or booleans converted unless the option is
    listed in ``STRING_OPTIONS``::

        [storage:local]
        provider = rootfs
        storage-dir = /var/lib/vprov/storage

    Raises ``configparser.NoOptionError`` if a section does not define its
    provider type.
    """

    configs = {}

    for section in config.sections():
        if not section.startswith(STORAGE_SECTION_PREFIX):
            continue

        name = section[len(STORAGE_SECTION_PREFIX):]
        providerType = config.get(section, PROVIDER_OPTION)

        attrs = {}
        for key, value in config.items(section):
            if key == PROVIDER_OPTION:
                continue
            elif key in STRING_OPTIONS:
                attrs[key] = value
            else:
                attrs[key] = coerceValue(value)

        configs[name] = storage.StorageConfig(name=name,
                providerType=providerType, attrs=attrs)

    return configs
