from injector import Injector
from activity_log.dependencies.dependency_injection import Dependencies

def create_injector(*extra_modules) -> Injector:
    return Injector([Dependencies(), *extra_modules])

injector: Injector = create_injector()
