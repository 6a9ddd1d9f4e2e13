import sys, argparse, logging
from pathlib import Path
from PySide6.QtWidgets import QApplication, QMainWindow, QMessageBox
from PySide6.QtGui import QAction

# 添加上级目录到路径以支持绝对导入
sys.path.insert(0, str(Path(__file__).parent.parent))

from editor.models import CalculatorDocument
from editor.property_panel import SelectionPanel
from fengshui.bagua import InvalidTrigram

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("八宅寄卦編宅計算器")
        self.doc = CalculatorDocument()
        self.panel = SelectionPanel()
        self.setCentralWidget(self.panel.widget)
        self.panel.load_choices(self.doc)
        self._connect()
        self._build_menu()
        self.panel.show_document(self.doc)

    # ---------- UI 构建 ----------
    def _build_menu(self):
        m_edit = self.menuBar().addMenu("編輯")
        act_undo = QAction("撤銷", self)
        act_undo.triggered.connect(self.on_undo)
        act_reset = QAction("重設", self)
        act_reset.triggered.connect(self.on_reset)
        m_edit.addAction(act_undo)
        m_edit.addAction(act_reset)

        # 快捷键
        act_undo.setShortcut("Ctrl+Z")
        act_reset.setShortcut("Ctrl+R")

    def _connect(self):
        self.panel.signals.fieldEdited.connect(self.on_field_edited)
        self.panel.signals.undoRequest.connect(self.on_undo)
        self.panel.signals.resetRequest.connect(self.on_reset)

    # ---------- 字段变化 ----------
    def on_field_edited(self, field: str, value):
        try:
            self.doc.set_field(field, value)
        except InvalidTrigram as e:
            # 卦表错误，不是用户输入问题
            logger.exception("卦象计算失败")
            QMessageBox.critical(self, "錯誤", str(e))
        except (KeyError, ValueError) as e:
            QMessageBox.critical(self, "錯誤", str(e))
        self.panel.show_document(self.doc)

    # ---------- 其它 ----------
    def on_undo(self):
        if self.doc.undo():
            self.panel.show_document(self.doc)

    def on_reset(self):
        self.doc.reset()
        self.panel.show_document(self.doc)


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("-v", "--verbose", action="store_true", help="输出调试日志")
    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    app = QApplication(sys.argv)
    w = MainWindow()
    w.resize(480, 640)
    w.show()
    sys.exit(app.exec())

if __name__ == "__main__":
    main()
