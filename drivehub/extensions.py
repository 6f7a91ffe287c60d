from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from redis import Redis
from rq import Queue
from flask import current_app

# Keyword arguments that belong to RQ, not to the job function.
RQ_KEYS = {'job_timeout', 'timeout', 'at_front', 'depends_on', 'result_ttl', 'ttl', 'meta', 'description'}


class RQWrapper:
    def __init__(self):
        self.redis = None
        self.queue = None

    def init_app(self, app):
        url = app.config.get("REDIS_URL")
        if not url:
            # no Redis configured (tests, dev machine): run jobs inline
            self.redis = None
            self.queue = None
            return
        try:
            self.redis = Redis.from_url(url)
            self.queue = Queue("default", connection=self.redis)
        except Exception:
            app.logger.exception('Redis/RQ init failed, falling back to sync execution')
            self.redis = None
            self.queue = None

    def _run_inline(self, func, func_args, kwargs):
        safe_kwargs = {k: v for k, v in kwargs.items() if k not in RQ_KEYS}
        try:
            return func(*func_args, **safe_kwargs)
        except Exception:
            # jobs are fire-and-forget; a failing notification never fails the request
            current_app.logger.exception('Synchronous job %s failed', getattr(func, '__name__', func))
        return None

    def enqueue(self, func, *args, **kwargs):
        if not self.queue:
            return self._run_inline(func, args, kwargs)
        try:
            return self.queue.enqueue(func, *args, **kwargs)
        except Exception:
            current_app.logger.exception('RQ enqueue failed, falling back to sync execution')
            return self._run_inline(func, args, kwargs)


db = SQLAlchemy()
login_manager = LoginManager()
rq = RQWrapper()
