from os import isatty
from sys import stdin, stdout, stderr, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession

from .util import CalculatorError
from .keypad import Keypad
from .lexer import Lexer


log = logging.getLogger(__name__)


class InteractiveInput:
    def __init__(self, prompt):
        self.prompt = prompt

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    # Keys and readout only; nothing to keep.
                                    history=None,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator.
    '''

    DEFAULT_PROMPT = '> '
    LOG_FORMAT = '%(name)s: %(message)s'

    def dumper(self):
        '''
        Dump all lexemes matches, and the engine call each key makes.
        '''
        lexer = Lexer()
        print('[groups]\t<repr(key)>\t<command>')
        for line in self.args.expressions:
            for match in lexer.lex(line):
                matched = match.group(0)  # the lexeme text itself
                groups = lexer.matchedgroups(match)
                command = (Keypad.describe(matched)
                           if lexer.isfeedable(match)
                           else None)
                print(*groups.keys(),
                      repr(matched),
                      command,
                      sep='\t')

    def executor(self):
        '''
        Press keys on the calculator, printing the display after each line.
        '''
        keypad = Keypad()
        lexer = Lexer()
        for line in self.args.expressions:
            try:
                for match in lexer.lex(line):
                    if lexer.isfeedable(match):
                        keypad.feed(lexer.matchedgroups(match))
            # Abort entire rest of line, makes sense anyway
            except CalculatorError as e:
                print(e.args[0], file=stderr)
            print(keypad.engine.display)
        return keypad

    def historian(self):
        '''
        Run calculator, then print the transcript of completed operations.
        '''
        keypad = self.executor()
        transcript = keypad.engine.transcript()
        if transcript:
            print(transcript)

    def keys(self):
        '''
        Print every key and the engine call it makes.
        '''
        for key in Keypad.KEYS:
            print(key, Keypad.describe(key), sep='\t')

    def _prompting_input(self):
        '''
        Return prompting input if either:
        - prompt explicitly specified.
        - both stdin/out are a tty

        Otherwise, plain stdin.
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='Pocket calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='log every engine command')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions',
                                       help='key lines to press')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-D', '--dump', self.dumper),
                                      ('-H', '--history', self.historian),
                                      ('-K', '--keys', self.keys)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action',
                                     help=action.__doc__.strip().splitlines()[0])
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        level = logging.DEBUG if self.args.verbose else logging.WARNING
        logging.basicConfig(format=self.LOG_FORMAT, level=level)
        # basicConfig does nothing if the host already configured logging.
        logging.getLogger(__package__).setLevel(level)
        # -K reads no input; don't go probing the terminal for it.
        if self.args.expressions is stdin and self.args.action != self.keys:
            self.args.expressions = self._prompting_input()
        log.debug('running %s', self.args.action.__name__)
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)


def main():
    CLI().run()
