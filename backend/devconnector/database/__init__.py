from devconnector.database.mongo import create_motor_client, init_mongo, close_mongo
