from .constraints import (ConstraintTranslator, InterfaceBinding, VolumeInfo,
        UNSUPPORTED_CONSTRAINTS)
from .environ import MAASEnviron, IMAASClient, MAAS_PROVIDER_TYPE


__all__ = ['ConstraintTranslator', 'InterfaceBinding', 'VolumeInfo',
        'UNSUPPORTED_CONSTRAINTS', 'MAASEnviron', 'IMAASClient',
        'MAAS_PROVIDER_TYPE', ]
