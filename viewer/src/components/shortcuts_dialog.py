"""Keyboard shortcuts help dialog."""

from PyQt5.QtWidgets import QDialog, QVBoxLayout, QTextEdit, QPushButton


class ShortcutsDialog(QDialog):
    """Dialog displaying all keyboard shortcuts and mouse controls"""
    
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Keyboard Shortcuts")
        self.setMinimumWidth(520)
        self.setMinimumHeight(460)
        
        layout = QVBoxLayout()
        
        text_edit = QTextEdit()
        text_edit.setReadOnly(True)
        text_edit.setHtml("""
        <h2>Keyboard Shortcuts</h2>
        
        <h3>File</h3>
        <table width="100%">
        <tr><td width="30%"><b>Ctrl+O</b></td><td>Open layer content file</td></tr>
        <tr><td><b>Ctrl+E</b></td><td>Export current view as PNG</td></tr>
        <tr><td><b>Alt+F4</b></td><td>Exit application</td></tr>
        </table>
        
        <h3>Navigation</h3>
        <table width="100%">
        <tr><td width="30%"><b>H</b></td><td>Go to the home layer</td></tr>
        <tr><td><b>Esc / Up</b></td><td>Zoom out to the parent layer</td></tr>
        <tr><td><b>Ctrl++</b></td><td>Zoom in on the current layer</td></tr>
        <tr><td><b>Ctrl+-</b></td><td>Zoom out on the current layer</td></tr>
        <tr><td><b>Ctrl+0</b></td><td>Reset view to 100%</td></tr>
        </table>
        
        <h3>Mouse and Touch</h3>
        <table width="100%">
        <tr><td width="30%"><b>Click node</b></td><td>Drill into the node's layer</td></tr>
        <tr><td><b>Right click</b></td><td>Zoom out to the parent layer</td></tr>
        <tr><td><b>Wheel</b></td><td>Zoom around the cursor</td></tr>
        <tr><td><b>Middle drag</b></td><td>Pan the view</td></tr>
        <tr><td><b>Pinch</b></td><td>Zoom around the pinch center</td></tr>
        <tr><td><b>One-finger drag</b></td><td>Pan the view</td></tr>
        </table>
        
        <h3>Help</h3>
        <table width="100%">
        <tr><td width="30%"><b>F1</b></td><td>Show this keyboard shortcuts help</td></tr>
        </table>
        
        <p><i>Tip: with Auto Navigation on, zooming far enough into a node
        enters it, and zooming far enough out returns to the parent.</i></p>
        """)
        
        close_btn = QPushButton("Close")
        close_btn.clicked.connect(self.accept)
        
        layout.addWidget(text_edit)
        layout.addWidget(close_btn)
        
        self.setLayout(layout)
