"""Desktop notifications via ``notify-send``."""

from ..tools import check_output


class NotifySend:
    """libnotify command-line dispatcher."""

    tool = "notify-send"

    def send(self, title: str, body: str, timeout_ms: int, app_name: str, timeout: float) -> None:
        check_output([self.tool, "-t", str(timeout_ms), "-a", app_name, title, body], timeout)
