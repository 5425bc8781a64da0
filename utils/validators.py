import re

# 旧数据里的 id 可能是毫秒时间戳，也可能是 Date.now() + Math.random() 产生的小数
INT_ID_RE = re.compile(r"^-?\d+$")
FLOAT_ID_RE = re.compile(r"^-?\d+\.\d+$")


def parse_record_id(raw):
    """
    把路径 / 表单中的 id 还原成存储中的类型：
      1. 已经是 int / float 直接返回（bool 除外）
      2. 纯数字字符串 => int
      3. 小数字符串 => float
      4. 其它情况返回 None，由调用方按"不存在"处理
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return raw
    if raw is None:
        return None
    text = str(raw).strip()
    if INT_ID_RE.match(text):
        return int(text)
    if FLOAT_ID_RE.match(text):
        return float(text)
    return None


def parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in ("1", "true", "yes", "on")
