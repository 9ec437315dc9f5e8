SERVICE_NAME = "common"
