from prometheus_client import Counter, Gauge, Histogram


class OrderMetrics:
    """
    Order Service Core Metrics Collector

    Tracks order transaction outcomes, conflict retries and event cache efficiency
    """

    def __init__(self):
        # ========== Order Transaction Metrics ==========
        self.order_creation_requests = Counter(
            'order_creation_requests_total',
            'Total order creation requests',
            ['strategy', 'result'],  # result: success or error code
        )

        self.order_creation_duration = Histogram(
            'order_creation_duration_seconds',
            'Order transaction duration including retries',
            ['strategy', 'result'],
            buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
        )

        self.order_transaction_retries = Counter(
            'order_transaction_retries_total',
            'Order transaction attempts retried after a concurrency conflict',
            ['strategy'],
        )

        self.tickets_sold = Counter('tickets_sold_total', 'Tickets sold by committed orders')

        self.orders_in_flight = Gauge('orders_in_flight', 'Order transactions currently running')

        # ========== Event Cache Metrics ==========
        self.event_cache_lookups = Counter(
            'event_cache_lookups_total',
            'Event cache lookups',
            ['result'],  # hit/miss/error
        )

    # ========== Helper Methods ==========

    def record_order_creation(
        self, *, strategy: str, result: str, duration: float, quantity: int = 0
    ):
        self.order_creation_requests.labels(strategy=strategy, result=result).inc()
        self.order_creation_duration.labels(strategy=strategy, result=result).observe(duration)
        if result == 'success':
            self.tickets_sold.inc(quantity)

    def record_retry(self, *, strategy: str):
        self.order_transaction_retries.labels(strategy=strategy).inc()

    def record_cache_lookup(self, *, result: str):
        self.event_cache_lookups.labels(result=result).inc()


# Global metrics instance
metrics = OrderMetrics()
