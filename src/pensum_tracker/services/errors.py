"""
服务层异常
"""


class NotFoundError(LookupError):
    """请求的记录不存在"""

    def __init__(self, entity, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} 不存在")
