from pytest import Item


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, e.g. to audit which displays a key sequence showed.

    Use with pytest -rP, and assertion pass hooks enabled:
    -o enable_assertion_pass_hook=true.
    '''
    where = item.name + ':' + str(lineno)
    print('given', where, str(orig))  # no repr()!
    # Drop pytest's trailing full-diff hint.
    print('actual', where, '\n'.join(str(expl).splitlines()[:-2]))
