import sys

import yaml

from rational import ParseError, RationalError
from rational.session import Session


class ReloadSessionRequest(StopIteration):
    pass


def main():
    session = Session()
    if len(sys.argv) > 1:
        with open(sys.argv[1]) as filestream:
            session = Session.from_obj(yaml.full_load(filestream))
            print("Integer type: {!r}, float format: {}".format(session.dtype, session.fmt))
            print("Found variables: {}".format(sorted(session.variables())))

    print("Enter an expression, or `name = expression` to store it. Type VARS to list variables, END when done or "
          "RELOAD to refresh the settings.")
    while True:
        try:
            l = input('=> ')
        except EOFError:
            break
        if l[0:3] == 'END':
            break
        if l == 'RELOAD':
            raise ReloadSessionRequest()
        if l == 'VARS':
            print(session.tabulate_variables(), end='\n\n')
            continue
        if not l.strip():
            continue

        try:
            result = session.run(l)
        except (RationalError, ParseError) as e:
            print("{}: {}".format(type(e).__name__, e), file=sys.stderr)
            continue

        print(result.tabulate_steps(), end='\n\n')
        print("{} = {}".format(result.name or 'result', result.value))
        if session.graph_path is not None:
            result.write_graph(session.graph_path, session.graph_format)


if __name__ == '__main__':
    while True:
        try:
            main()
        except ReloadSessionRequest:
            continue
        break
