from typing import Any, Optional
from werkzeug.exceptions import HTTPException


class BizError(HTTPException):
    code: int  # HTTP 状态码
    message: str  # 业务提示
    data: Optional[Any]  # 附加数据

    def __init__(self, message: str = "业务异常", code: int = 400, data: Any = None):
        self.code = code
        self.message = message
        self.data = data
        super().__init__(description=message)


class ValidationError(BizError):
    """必填字段缺失或取值非法，调用方需要重新输入，状态未发生任何变化。"""

    def __init__(self, message: str = "参数校验失败", data: Any = None):
        super().__init__(message=message, code=400, data=data)


class NotFoundError(BizError):
    """操作的目标 id 不存在。"""

    def __init__(self, message: str = "记录不存在", data: Any = None):
        super().__init__(message=message, code=404, data=data)


class PersistenceError(BizError):
    """底层存储读写失败（例如序列化数据损坏、后端不可用）。"""

    def __init__(self, message: str = "数据保存失败", key: Optional[str] = None, data: Any = None):
        self.key = key
        super().__init__(message=message, code=500, data=data)
