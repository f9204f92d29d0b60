from app.database.mongo import init_mongo, close_mongo, ping_mongo
