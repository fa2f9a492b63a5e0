"""
Named loggers for the provisioning components, emitting their events through
Twisted's log system with the severities of Python's standard logging module.
"""



from datetime import datetime

import logging

from twisted.python import log



class Logger(object):
    """
    Sends events tagged with a dotted ``name`` to the Twisted log.

    Provisioning components accept an instance of this class as their ``log``
    argument, allowing the caller to route their messages to a dedicated
    system or to capture them in tests.
    """

    def __init__(self, name='', **kwargs):
        """
        The keyword arguments (``system`` being the usual one) are copied into
        every event sent by this logger, together with its ``name``. Observers
        added through a logger with an empty name receive all events.
        """

        self.name = name
        self.config = kwargs
        self.config['name'] = name


    def addObserver(self, observer, *args, **kwargs):
        """
        Registers ``observer`` for the events whose name starts with the name
        of this logger. It is called with the event followed by ``*args`` and
        ``**kwargs``.

        Returns the registered callable, to be handed to ``removeObserver``.
        """

        def observerFilter(event):
            if event.get('name', '').startswith(self.name):
                observer(event, *args, **kwargs)

        log.addObserver(observerFilter)
        return observerFilter


    def removeObserver(self, observer):
        log.removeObserver(observer)


    def log(self, msg, *args, **kwargs):
        """
        Emits ``msg`` through ``twisted.python.log.msg`` with the logger keys,
        the given ``**kwargs`` and a ``timestamp``.

        String messages are expanded with ``str.format`` when ``*args`` are
        given, other objects are passed through as they are.
        """

        config = self.config.copy()
        config.update(kwargs)
        config['timestamp'] = datetime.now()

        if isinstance(msg, str) and args:
            msg = msg.format(*args)
        elif args:
            raise TypeError('formatting arguments given for a non-string '
                    'message')

        log.msg(msg, **config)


    def debug(self, msg, *args, **kwargs):
        kwargs['severity'] = logging.DEBUG
        self.log(msg, *args, **kwargs)


    def info(self, msg, *args, **kwargs):
        kwargs['severity'] = logging.INFO
        self.log(msg, *args, **kwargs)


    def warning(self, msg, *args, **kwargs):
        kwargs['severity'] = logging.WARNING
        self.log(msg, *args, **kwargs)
