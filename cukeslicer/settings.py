DEFAULT_EXPECTED_TAGS = ["@smoke", "@regression"]
TAG_SIGIL = "@"
# 12-hour clock, milliseconds appended separately
TIMESTAMP_FORMAT = "%I%M%S"
FEATURE_FILE_EXTENSION = ".feature"
FEATURES_DIR_NAME = "features"
PARALLEL_FEATURES_DIR_NAME = "parallel_features"
OUTLINE_SCENARIO_KEYWORD = "Scenario"
