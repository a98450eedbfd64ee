# Drag and placement package
