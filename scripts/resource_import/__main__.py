from scripts.resource_import.cli import main

if __name__ == "__main__":
    main()
