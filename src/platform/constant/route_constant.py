# Event
EVENT_BASE = '/api/event'
EVENT_GET = '/api/event/{event_id}'
EVENT_STATUS = '/api/event/{event_id}/status'
EVENT_MY_EVENTS = '/api/event/my_events'

# Order
ORDER_BASE = '/api/order'
ORDER_GET = '/api/order/{order_id}'
ORDER_MY_ORDERS = '/api/order/my_orders'
ORDER_EVENT_ORDERS = '/api/order/event/{event_id}'
ORDER_STATUS = '/api/order/{order_id}/status'

# Platform
HEALTH = '/health'
METRICS = '/metrics'
