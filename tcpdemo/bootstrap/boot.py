import tcpdemo.bootstrap.handlers.api  # noqa: F401  registers the routes
from tcpdemo.bootstrap.config.loader import get_cli_args
from tcpdemo.bootstrap.deps import get_cp
from tcpdemo.core.helpers.utils import setup_logging, stop_on_signals


def main():
    cli = get_cli_args()
    setup_logging(cli.log_level)

    controlplane = get_cp()
    loop = controlplane.loop

    try:
        with stop_on_signals(loop) as stop_event:
            loop.run_until_complete(controlplane.start(stop_event))
    except KeyboardInterrupt:
        pass
    finally:
        try:
            loop.run_until_complete(loop.shutdown_asyncgens())
            loop.run_until_complete(loop.shutdown_default_executor())
        finally:
            loop.close()


if __name__ == "__main__":
    main()
