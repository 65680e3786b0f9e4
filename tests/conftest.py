import logging

from pytest import fixture

from rpnpad.lexer import Lexer
from rpnpad.machine import Machine


@fixture(autouse=True)
def reset_logging():
    '''
    Undo the CLI's logging setup, whose handler outlives the test's capture.
    '''
    yield
    logger = logging.getLogger('rpnpad')
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@fixture
def machine():
    return Machine()


@fixture
def hex_machine():
    return Machine(base=16)


@fixture
def keys():
    '''
    Press a line of keystroke words on a machine, returning the display.
    '''
    lexer = Lexer()

    def press(machine, line):
        for match in lexer.lex(line):
            if lexer.isfeedable(match):
                machine.feed(lexer.matchedgroups(match))
        return machine.display
    return press
