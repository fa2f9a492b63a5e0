"""
Interfaces to be implemented by compute backends turning constraint sets into
acquired machines.
"""



from zope.interface import Interface



class IEnviron(Interface):
    """
    A compute backend able to acquire machines matching a constraint set.

    All methods return deferreds.
    """

    def supportedArchitectures():
        """
        Fires with the list of architecture names the backend can provide.

        May need to query the backend and fail accordingly.
        """


    def constraintsValidator():
        """
        Fires with a ``vprov.constraints.Validator`` declaring the
        constraints and values supported by this backend.
        """


    def acquireNode(cons, volumes=(), bindings=()):
        """
        Validates and translates the ``cons`` constraint set, together with
        the requested extra volumes and interface bindings, and acquires a
        matching node from the backend.

        Fires with the node description returned by the backend.
        """
