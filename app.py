# app.py
from flask import Flask
from config.settings import get_config
from extensions.database import db, migrate
from extensions.logger import init_logger
from extensions.storage import init_storage
from extensions.services import init_services
from utils.response import json_response
from utils.exceptions import BizError
from controllers.case_group_controller import case_group_bp
from controllers.test_case_controller import test_case_bp
from controllers.batch_controller import batch_bp
from controllers.dashboard_controller import dashboard_bp
from controllers.settings_controller import settings_bp


def create_app(config_name="development", store=None, id_generator=None):
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))

    # 初始化扩展
    db.init_app(app)
    migrate.init_app(app, db)
    init_logger(app)
    app.logger.info(f"当前存储后端: {app.config['STORAGE_BACKEND']}")

    # 存储与服务（测试可注入替身 store / id 生成器）
    kv_store = init_storage(app, store=store)
    init_services(app, kv_store, id_generator=id_generator)

    # 用例分组
    app.register_blueprint(case_group_bp)
    # 用例增删改查
    app.register_blueprint(test_case_bp)
    # 执行批次
    app.register_blueprint(batch_bp)
    # 仪表盘
    app.register_blueprint(dashboard_bp)
    # 系统设置
    app.register_blueprint(settings_bp)

    # 错误处理
    @app.errorhandler(404)
    def not_found(e):
        return json_response(message="接口不存在", code=404)

    @app.errorhandler(500)
    def server_error(e):
        return json_response(message="服务器内部错误", code=500)

    @app.errorhandler(BizError)
    def _biz_err(e: BizError):
        return json_response(code=e.code, message=e.message, data=e.data)

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host="127.0.0.1", port=8888, debug=True)
