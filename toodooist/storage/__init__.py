# Persistent store package
