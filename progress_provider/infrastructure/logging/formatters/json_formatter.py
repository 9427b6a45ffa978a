"""JSON formatter for structured machine-readable logs."""

import json
import logging
import traceback
from datetime import datetime


class JsonFormatter(logging.Formatter):
    """Format log records as single-line JSON.

    Correlation fields (``operation``, ``node_id``) are lifted out of the
    record context to the top level, and a progress report attached with
    ``extra={'report': ...}`` is written as a ``progress`` object, so a log
    file can be filtered per node or replayed as a status timeline.
    """

    PROMOTED_FIELDS = ('operation', 'node_id')

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'thread_name': record.threadName,
        }

        context = dict(getattr(record, 'context', None) or {})
        for field in self.PROMOTED_FIELDS:
            if field in context:
                log_data[field] = context.pop(field)

        report = getattr(record, 'report', None)
        if report is not None:
            log_data['progress'] = report.to_dict()

        if context:
            log_data['context'] = context

        tb = getattr(record, 'traceback', None)
        if tb:
            log_data['traceback'] = tb
        elif record.exc_info:
            log_data['traceback'] = ''.join(traceback.format_exception(*record.exc_info))

        return json.dumps(log_data, separators=(',', ':'), default=str)
