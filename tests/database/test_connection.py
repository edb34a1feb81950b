from src.employee_management.employee_management.database.connection import DBConfig, DatabaseConnection


def test_config_defaults_and_kwargs():
    cfg = DBConfig.from_dict({"host": "db", "password": "pw"})

    assert cfg.describe() == "root@db:3306/employee_db"
    assert cfg.pool_size == 5
    assert cfg.connect_kwargs()["database"] == "employee_db"
    assert cfg.connect_kwargs()["charset"] == "utf8mb4"
    assert "database" not in cfg.connect_kwargs(with_database=False)


def test_instances_are_shared_per_config():
    a = DatabaseConnection.get_instance(DBConfig.from_dict({"database": "emp_a", "pool_size": 0}))
    b = DatabaseConnection.get_instance(DBConfig.from_dict({"database": "emp_a", "pool_size": 0}))
    c = DatabaseConnection.get_instance(DBConfig.from_dict({"database": "emp_b", "pool_size": 0}))

    assert a is b
    assert a is not c
    assert c.config.database == "emp_b"
