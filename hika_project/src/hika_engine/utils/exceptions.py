"""
异常定义

定义多维棋类走法引擎的各种异常类型。

注意: 非法走法不属于异常，由 is_valid_move / move_if_valid 通过返回值报告。
"""


class HikaError(Exception):
    """
    走法引擎基础异常

    所有引擎相关异常的基类。
    """

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__

    def __str__(self):
        return f"[{self.error_code}] {self.message}"


class OutOfBoundsError(HikaError):
    """
    越界访问异常

    当访问棋盘尺寸以外的坐标时抛出。
    """

    def __init__(self, position: str, size: str = ""):
        message = f"坐标越界: {position}"
        if size:
            message += f" (棋盘尺寸: {size})"
        super().__init__(message, "OUT_OF_BOUNDS")
        self.position = position
        self.size = size


class MissingRuleError(HikaError):
    """
    缺少走法规则异常

    当请求某种棋子的走法而规则字典中没有该棋子类型时抛出。
    """

    def __init__(self, piece_id: str):
        super().__init__(f"规则字典中不存在棋子类型: {piece_id}", "MISSING_RULE")
        self.piece_id = piece_id


class LayoutParseError(HikaError):
    """
    布局解析异常

    当布局字符串的尺寸部分无法解析时抛出。
    """

    def __init__(self, layout: str, reason: str = ""):
        message = f"布局解析失败: {layout!r}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "LAYOUT_PARSE_ERROR")
        self.layout = layout
        self.reason = reason


class RuleDefinitionError(HikaError):
    """
    规则定义异常

    当自定义规则数据(字典/YAML)格式错误时抛出。
    """

    def __init__(self, piece_id: str, reason: str = ""):
        message = f"规则定义错误 - {piece_id}"
        if reason:
            message += f": {reason}"
        super().__init__(message, "RULE_DEFINITION_ERROR")
        self.piece_id = piece_id
        self.reason = reason


class ConfigurationError(HikaError):
    """
    配置错误异常

    当配置参数无效时抛出。
    """

    def __init__(self, config_name: str, reason: str = ""):
        message = f"配置错误 - {config_name}"
        if reason:
            message += f": {reason}"
        super().__init__(message, "CONFIG_ERROR")
        self.config_name = config_name
        self.reason = reason
