"""
Registry of pluggable backends, selected by their backend type identifier.
"""



from vprov import error



class Registry(object):
    """
    Maps backend type identifiers to backend instances providing a given
    interface.

    Registered objects are adapted to the interface if they don't provide it
    directly, so that a wrong object is rejected at registration time instead
    of at first use.
    """

    def __init__(self, interface, kind='provider'):
        self.interface = interface
        self.kind = kind
        self.backends = {}


    def register(self, backendType, backend):
        """
        Registers ``backend`` for the given type. Registering a type twice is
        a programming error and raises ``ValueError``.
        """

        if backendType in self.backends:
            raise ValueError('{0} type {1!r} already registered'.format(
                    self.kind, backendType))

        self.backends[backendType] = self.interface(backend)


    def get(self, backendType):
        """
        Returns the backend registered for ``backendType`` or raises
        ``error.UnknownProvider``.
        """

        try:
            return self.backends[backendType]
        except KeyError:
            raise error.UnknownProvider('{0} type {1!r} not registered'.format(
                    self.kind, backendType))


    def types(self):
        return sorted(self.backends)


    def __contains__(self, backendType):
        return backendType in self.backends
