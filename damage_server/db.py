from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

def make_engine(db_uri: str, echo: bool):
    connect_args = {}
    if db_uri.startswith("sqlite"):
        # Flask serves requests from worker threads; the pool hands the file
        # connection to whichever thread needs it.
        connect_args["check_same_thread"] = False
    return create_engine(db_uri, echo=echo, future=True, connect_args=connect_args)

def make_session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
