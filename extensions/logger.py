# extensions/logger.py
import os, sys, logging, json, uuid, time
from logging.handlers import RotatingFileHandler
from flask import g, request
from werkzeug.exceptions import HTTPException

_REQUEST_ID_KEY = "request_id"


class JsonFormatter(logging.Formatter):
    def __init__(self, app_name=None):
        super().__init__()
        self.app_name = app_name

    def format(self, record):
        data = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "app": self.app_name,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if hasattr(record, "request_id"):
            data["request_id"] = record.request_id
        if record.exc_info:
            data["exc"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False)


class RequestIdFilter(logging.Filter):
    def filter(self, record):
        from flask import has_request_context
        if has_request_context():
            record.request_id = getattr(g, _REQUEST_ID_KEY, "-")
        else:
            record.request_id = "-"
        return True


def _ensure_request_id():
    if not hasattr(g, _REQUEST_ID_KEY):
        # 允许前端透传 X-Request-ID，便于把一次操作的前后端日志串起来
        setattr(g, _REQUEST_ID_KEY, request.headers.get("X-Request-ID") or uuid.uuid4().hex)
    return getattr(g, _REQUEST_ID_KEY)


def _install_handlers(cfg, level):
    root = logging.getLogger()
    # 避免重复添加
    if root.handlers:
        return False

    root.setLevel(level)

    text_fmt = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(request_id)s | %(name)s | %(message)s",
        "%Y-%m-%d %H:%M:%S"
    )
    json_fmt = JsonFormatter(cfg["APP_NAME"])
    formatter = json_fmt if cfg["LOG_JSON"] else text_fmt

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(formatter)
    console.addFilter(RequestIdFilter())
    root.addHandler(console)

    if cfg.get("LOG_TO_FILE", True):
        log_dir = cfg["LOG_DIR"]
        os.makedirs(log_dir, exist_ok=True)

        def make_handler(filename, lvl=None):
            h = RotatingFileHandler(
                os.path.join(log_dir, filename),
                maxBytes=cfg["LOG_MAX_BYTES"],
                backupCount=cfg["LOG_BACKUP_COUNT"],
                encoding="utf-8"
            )
            h.setLevel(lvl or level)
            h.setFormatter(formatter)
            h.addFilter(RequestIdFilter())
            return h

        root.addHandler(make_handler("app.log"))
        root.addHandler(make_handler("error.log", logging.ERROR))

    # 降低 noisy 包
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("werkzeug").setLevel(logging.INFO)
    logging.getLogger("redis").setLevel(logging.WARNING)
    return True


def init_logger(app):
    cfg = app.config
    level = getattr(logging, cfg["LOG_LEVEL"].upper(), logging.INFO)
    if _install_handlers(cfg, level):
        app.logger.info("Logger initialized")

    # 请求钩子每个 app 都要注册（测试里会多次 create_app）
    @app.before_request
    def _before():
        g._req_start = time.time()
        _ensure_request_id()
        app.logger.info(f"REQ {request.method} {request.path} from {request.remote_addr}")

    @app.after_request
    def _after(resp):
        duration = (time.time() - getattr(g, "_req_start", time.time())) * 1000
        resp.headers["X-Request-ID"] = getattr(g, _REQUEST_ID_KEY, "-")
        app.logger.info(f"RESP {request.method} {request.path} {resp.status_code} {duration:.1f}ms")
        return resp

    @app.errorhandler(Exception)
    def _err(e):
        if isinstance(e, HTTPException):
            code = e.code
            msg = e.description
        else:
            code = 500
            msg = "服务器内部错误"
            app.logger.exception("UNHANDLED EXCEPTION")
        from utils.response import json_response
        return json_response(code=code, message=msg), code
