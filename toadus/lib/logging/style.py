from pygments.style import Style
from pygments.token import Keyword, Name, Number, String


class LogStyle(Style):
    styles = {
        Name.Tag: "#5f87af",
        String: "#87af5f",
        Number: "#d7875f",
        Keyword.Constant: "#af87d7",
    }
