from rich.pretty import pprint

from argscheme import *

__prog__ = "photos"
__codes__ = {
    FaultCode.WRONG_TYPE: "E-TYPE",
}
__docs__ = {
    FaultCode.WRONG_TYPE: "every photo needs a numeric id",
}


class Photo:
    pass


@accepts([
    {"id": INT | REQUIRED},
    {"label": STRING | OPTIONAL, "_default": "untitled"},
    {"photo": OBJECT | OPTIONAL, "_type": Photo},
    {"callback": FUNCTION | OPTIONAL},
], shell=True, fancy=True)
def store(id, label, photo, callback):
    return {"id": id, "label": label, "photo": photo, "callback": callback}


if __name__ == '__main__':
    pprint(store.__schema__)
    pprint(store(3, print))
    pprint(store(3, "three", Photo(), label="drei"))
    store("three")
