"""
Service context tag attached to every log line.

Identifies which instance wrote a line when several replicas of the order
service share one log stream.
"""

import os
from functools import lru_cache
import socket


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'ticket-order-service')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Container hostname when orchestrated, PID for local development
    if deploy_env == 'local_dev':
        instance = str(os.getpid())
    else:
        instance = (os.getenv('HOSTNAME') or socket.gethostname())[:12]

    return f'{service_name}@{deploy_env}:{instance}'
