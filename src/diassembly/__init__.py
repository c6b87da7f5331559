from diassembly.assembler import Assembler
from diassembly.assembly import (
    Assembly,
    ClassLoaderAssembly,
    ManualRegistration,
    ManualRegistrationAssembly,
    ModuleLoaderAssembly,
)
from diassembly.container import Container
from diassembly.container_context import ContainerContext, container_context
from diassembly.exceptions import (
    DIAssemblyError,
    DIAssemblyInvalidRegistrationTypeError,
    DIAssemblyNotRegisteredError,
    DIAssemblyRegistrationClosedError,
    DIAssemblyUnsupportedTargetError,
)
from diassembly.injection import (
    ConstructorInjection,
    MethodInjection,
    PropertyInjection,
    ViewComponent,
    inject_constructor,
    inject_method,
    inject_property,
    injectable,
    instantiate,
)
from diassembly.registrations import (
    Injectable,
    Qualifier,
    RegistrationEntry,
    RegistrationType,
    ResolverProtocol,
)

__all__ = [
    "Assembler",
    "Assembly",
    "ClassLoaderAssembly",
    "ConstructorInjection",
    "Container",
    "ContainerContext",
    "DIAssemblyError",
    "DIAssemblyInvalidRegistrationTypeError",
    "DIAssemblyNotRegisteredError",
    "DIAssemblyRegistrationClosedError",
    "DIAssemblyUnsupportedTargetError",
    "Injectable",
    "ManualRegistration",
    "ManualRegistrationAssembly",
    "MethodInjection",
    "ModuleLoaderAssembly",
    "PropertyInjection",
    "Qualifier",
    "RegistrationEntry",
    "RegistrationType",
    "ResolverProtocol",
    "ViewComponent",
    "container_context",
    "inject_constructor",
    "inject_method",
    "inject_property",
    "injectable",
    "instantiate",
]
