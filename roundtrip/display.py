"""
The in-game panel: two buttons to start and stop the programs and a line of
status text
"""
from . import const


class MissionPanel(object):
    def __init__(self, connection):
        canvas = connection.ui.stock_canvas
        screenSize = canvas.rect_transform.size

        self.panel = canvas.add_panel()
        rect = self.panel.rect_transform
        rect.size = (200, 100)
        rect.position = (110 - (screenSize[0] / 2), 0)

        self.ascentButton = self.panel.add_button(const.ASCENT_LABEL)
        self.ascentButton.rect_transform.position = (0, 20)

        self.returnButton = self.panel.add_button(const.RETURN_LABEL)
        self.returnButton.rect_transform.position = (0, -15)

        self.statusText = self.panel.add_text("")
        self.statusText.rect_transform.position = (0, -45)
        self.statusText.color = (1, 1, 1)
        self.statusText.size = 18

    def remove(self):
        self.panel.remove()
