from tcpdemo.bootstrap.deps import get_app
from tcpdemo.core.models.message import Echo, Jumble, RequestType, Response, Success
from tcpdemo.core.service.jumble import jumble


app = get_app()


@app.request(RequestType.ECHO)
async def echo(request: Echo) -> Response:
    return Success(request.message)


@app.request(RequestType.JUMBLE)
async def jumble_message(request: Jumble) -> Response:
    return Success(jumble(request.message, request.amount))
