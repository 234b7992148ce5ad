from typing import Any, Dict
from uuid import UUID

from fastapi.testclient import TestClient

from src.platform.constant.route_constant import EVENT_BASE, ORDER_BASE
from test.util_constant import (
    DEFAULT_EVENT_DATE,
    DEFAULT_TICKET_PRICE,
    DEFAULT_TITLE,
    DEFAULT_TOTAL_TICKETS,
    DEFAULT_VENUE_NAME,
)


def assert_response_status(response, expected_status: int, message: str | None = None):
    response_text = getattr(response, 'text', getattr(response, 'content', 'N/A'))
    assert response.status_code == expected_status, (
        message or f'Expected {expected_status}, got {response.status_code}: {response_text}'
    )


def assert_error_body(response, *, status_code: int, error_code: str) -> Dict[str, Any]:
    assert_response_status(response, status_code)
    body = response.json()
    assert body['error_code'] == error_code, body
    assert body['detail']
    return body


def create_event(
    client: TestClient, headers: Dict[str, str], **overrides: Any
) -> Dict[str, Any]:
    event_data = {
        'title': DEFAULT_TITLE,
        'description': 'An evening of live jazz',
        'venue_name': DEFAULT_VENUE_NAME,
        'event_date': DEFAULT_EVENT_DATE.isoformat(),
        'ticket_price': str(DEFAULT_TICKET_PRICE),
        'total_tickets': DEFAULT_TOTAL_TICKETS,
    } | overrides
    response = client.post(EVENT_BASE, json=event_data, headers=headers)
    assert_response_status(response, 201, f'Failed to create event: {response.text}')
    return response.json()


def create_order(
    client: TestClient, headers: Dict[str, str], *, event_id: UUID | str, quantity: int
) -> Any:
    return client.post(
        ORDER_BASE,
        json={'event_id': str(event_id), 'quantity': quantity},
        headers=headers,
    )
