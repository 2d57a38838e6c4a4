from sparrowwire.statement import CreateTable


def test_empty_table():
    assert str(CreateTable("t")) == "CREATE TABLE t"


def test_if_not_exists():
    assert str(CreateTable("t", if_not_exists=True)) == "CREATE TABLE IF NOT EXISTS t"


def test_columns_only():
    statement = CreateTable("db.t", columns=["a INT", "b TEXT"])
    assert str(statement) == "CREATE TABLE db.t (a INT, b TEXT)"


def test_constraints_only():
    statement = CreateTable("t", constraints=["PRIMARY KEY (a)"])
    assert str(statement) == "CREATE TABLE t (PRIMARY KEY (a))"


def test_columns_and_constraints():
    statement = CreateTable(
        "t", if_not_exists=True, columns=["a INT"], constraints=["PRIMARY KEY (a)"]
    )
    assert str(statement) == "CREATE TABLE IF NOT EXISTS t (a INT, PRIMARY KEY (a))"


def test_items_rendered_with_str():
    class Col:
        def __str__(self):
            return "x CHAR"

    assert str(CreateTable("t", columns=[Col()])).endswith("(x CHAR)")