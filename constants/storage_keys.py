# constants/storage_keys.py
"""键值存储中的集合名，与旧版浏览器存储保持一致。"""

GROUPS_KEY = "testCaseGroups"
CASES_KEY = "testCases"
BATCHES_KEY = "testBatches"
SETTINGS_KEY = "appSettings"

# 已分配过的最大批次 id，保证删除批次后 id 不被复用
BATCH_ID_MARK_KEY = "testBatchesLastId"
