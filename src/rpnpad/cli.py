import sys
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession

from .util import RPNError, setup_logging
from .machine import Machine
from .lexer import Lexer
from .radix import BASES, format_value


log = logging.getLogger(__name__)


class InteractiveInput:
    '''
    Prompting line source, showing the machine's state as it goes.
    '''
    def __init__(self, prompt, machine):
        self.prompt = prompt
        self.machine = machine

    def mode(self):
        '''
        Base indicator, blank in decimal.
        '''
        if self.machine.base == 10:
            return ''
        return 'BASE {}'.format(self.machine.base)

    def stack(self):
        '''
        Stack, top rightmost, in the current base.
        '''
        return ' '.join(format_value(value, self.machine.base)
                        for value
                        in self.machine.stack) or '(empty)'

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    history=None,
                                    rprompt=self.mode,
                                    bottom_toolbar=self.stack,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to RPN system.
    '''

    DEFAULT_PROMPT = '> '

    def dumper(self):
        '''
        Dump all lexemes matches, and the events they make.
        '''
        machine = Machine()
        lexer = Lexer()
        print('[groups]\t<repr(lexeme)>\t<events>')
        for line in self.args.expressions:
            for match in lexer.lex(line):
                matched = match.group(0)  # the lexeme text itself
                groups = lexer.matchedgroups(match)
                events = ['{}({!r})'.format(submit.__name__, argument)
                          for submit, argument
                          in machine.parse(groups)]
                print(*groups.keys(),
                      repr(matched),
                      ' '.join(events),
                      sep='\t')

    def executor(self):
        '''
        Run machine (RPN calculator), printing the display after each line.
        '''
        machine = self.machine
        lexer = Lexer()
        for line in self.args.expressions:
            try:
                for match in lexer.lex(line):
                    if lexer.isfeedable(match):
                        machine.feed(lexer.matchedgroups(match))
            # Abort entire rest of line, makes sense anyway
            except RPNError as e:
                log.debug('Rest of line dropped', exc_info=True)
                print(e.args[0], file=sys.stderr)
            print(machine.display, flush=True)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        lexer = Lexer()
        print(lexer.LEXEME)

    def keys(self):
        '''
        Print all possible keystroke words.
        '''
        print('commands:', *Machine.COMMANDS)
        print('operators:', *Machine.OPERATORS)
        print('constants:', *('#' + name for name in Machine.CONSTANTS))
        print('bases:', *('@' + str(base) for base in BASES))

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           sys.stdin.isatty() and sys.stdout.isatty():
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    machine=self.machine)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='Keypad RPN calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='log every keystroke')
        self.argument_parser.add_argument('--log-file',
                                          help='also write the log to this file')
        self.argument_parser.add_argument('-b', '--base',
                                          type=int,
                                          choices=BASES,
                                          default=Machine.DEFAULT_BASE,
                                          help='initial base')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions',
                                       help='keystroke lines to run')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper),
                                      ('-K', '--keys', self.keys)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=None)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        setup_logging(logging.DEBUG if self.args.verbose else logging.WARNING,
                      log_file=self.args.log_file)
        self.machine = Machine(base=self.args.base)
        # Only the actions reading lines need stdin, or a terminal.
        if self.args.expressions is None and \
           self.args.action in (self.executor, self.dumper):
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)
