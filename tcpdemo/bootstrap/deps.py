import json
from functools import lru_cache

from pydantic import ValidationError

from tcpdemo.bootstrap.config.settings import TcpDemoConfig
from tcpdemo.core.controlplane import ControlPlane
from tcpdemo.core.routing.app import RoutedApplication


@lru_cache
def get_cp() -> ControlPlane:
    return ControlPlane(
        config=get_config(),
        app=get_app(),
    )


@lru_cache
def get_app() -> RoutedApplication:
    return RoutedApplication()


@lru_cache
def get_config() -> TcpDemoConfig:
    try:
        return TcpDemoConfig()
    except ValidationError as ex:
        raise SystemExit(format_validation_error(ex))


def format_validation_error(ex: ValidationError) -> str:
    msg = ["Configuration validation failed:"]
    errs = json.loads(ex.json())
    for err in errs:
        msg.append(f"  {'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}")
    return "\n".join(msg)
