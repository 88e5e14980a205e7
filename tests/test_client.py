import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sendgrid_transport.mailer.client import ProviderResponse, SendGridClient
from sendgrid_transport.mailer.errors import TransportError, TransportFault
from sendgrid_transport.mailer.payload import Content, EmailAddress, Mail


def _mail() -> Mail:
    return Mail(
        from_email=EmailAddress("a@x.com"),
        subject="Hi",
        to=EmailAddress("b@x.com"),
        content=Content("text/plain", "Hello"),
    )


def _session(status: int, text: str = "") -> MagicMock:
    session = MagicMock()
    session.post.return_value = MagicMock(
        status_code=status, text=text, headers={"X-Message-Id": "abc"}
    )
    return session


def test_posts_json_with_bearer_token() -> None:
    session = _session(202)
    client = SendGridClient("SG.key", session=session)

    response = client.send(_mail())

    assert response == ProviderResponse(202, "", {"X-Message-Id": "abc"})
    assert response.ok
    args, kwargs = session.post.call_args
    assert args == ("https://api.sendgrid.com/v3/mail/send",)
    assert kwargs["headers"]["Authorization"] == "Bearer SG.key"
    assert kwargs["json"] == _mail().to_dict()
    assert kwargs["timeout"] is None


def test_custom_base_url_and_timeout() -> None:
    session = _session(202)
    client = SendGridClient("SG.key", base_url="http://localhost:3030/", timeout=5, session=session)

    client.send(_mail())

    assert client.url == "http://localhost:3030/mail/send"
    assert session.post.call_args.kwargs["timeout"] == 5


def test_error_status_is_returned() -> None:
    client = SendGridClient("SG.key", session=_session(400, "Bad Request"))

    response = client.send(_mail())

    assert response.status_code == 400
    assert response.body == "Bad Request"
    assert not response.ok


@pytest.mark.parametrize(
    "status, ok", [(199, False), (200, True), (202, True), (299, True), (300, False), (502, False)]
)
def test_response_ok_range(status: int, ok: bool) -> None:
    assert ProviderResponse(status).ok is ok


def test_network_error_is_wrapped() -> None:
    session = MagicMock()
    cause = requests.Timeout("timed out")
    session.post.side_effect = cause
    client = SendGridClient("SG.key", session=session)

    with pytest.raises(TransportFault) as info:
        client.send(_mail())

    assert isinstance(info.value, TransportError)
    assert info.value.__cause__ is cause


@patch("sendgrid_transport.mailer.client.requests.post")
def test_without_session_posts_directly(mock_post: MagicMock) -> None:
    mock_post.return_value = MagicMock(status_code=202, text="", headers={})
    client = SendGridClient("SG.key", timeout=3)

    response = client.send(_mail())

    assert response.ok
    mock_post.assert_called_once()
    assert mock_post.call_args.args == ("https://api.sendgrid.com/v3/mail/send",)
    assert mock_post.call_args.kwargs["timeout"] == 3
