"""Minimal demonstration of the console exception strategy."""

from mvc_console import ConsoleResponseDelegatorFactory, ExceptionStrategy
from mvc_console.domain.responses import HttpResponse
from mvc_console.events import EVENT_DISPATCH_ERROR, ErrorCode, EventManager, MvcEvent


def load_report():
    try:
        int("not-a-number")
    except ValueError as exc:
        raise RuntimeError("报表加载失败") from exc


if __name__ == "__main__":
    response = ConsoleResponseDelegatorFactory()(None, "Response", HttpResponse)
    events = EventManager()
    strategy = ExceptionStrategy()
    strategy.attach(events)

    event = MvcEvent()
    try:
        load_report()
    except RuntimeError as exc:
        event.set_error(ErrorCode.EXCEPTION).set_param("exception", exc)
        events.trigger(EVENT_DISPATCH_ERROR, event)

    model = event.get_result()
    response.set_content(model.get_result())
    print("Response:", type(response).__name__)
    print(response.get_content())
    strategy.detach(events)
